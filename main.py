from commando import *


@command(description="Greets someone, loudly with --loud.")
def greet(application, output, input, parameter):
    message = "hello, %s" % parameter.get_argument("who")
    output.writeln(message.upper() if parameter.get_option("loud") else message)


greet.add_argument("who", PARAMETER_REQUIRED)
greet.add_option("loud")


if __name__ == '__main__':
    application = Application(name="commando demo", default=HelpCommand())
    application.add_command(greet)
    raise SystemExit(application.main())
