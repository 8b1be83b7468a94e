"""
Parameters module behavioral tests (tokenizing, command-name toggle, binding).

Scope
- Validate token classification: long options, flag clusters, command name, positionals.
- Validate the command-name toggle (fold into / take out of the positionals).
- Validate argument and option binding, including the required checks and their messages.
- Validate get_option/get_argument resolution, including the bare-option quirk.

Conventions
- Test method names follow CamelCase per project convention.
- Every parse starts from an explicit token list (script name first); sys.argv is never read.
"""
import unittest
from unittest import TestCase

from commando import (
    Argument,
    Option,
    Parameter,
    PARAMETER_REQUIRED,
    OPTION_VALUE_REQUIRED,
    ConfigurationError,
    MissingRequiredArgumentError,
    MissingRequiredOptionValueError,
)


class TestTokenizing(TestCase):
    """Behavioral tests for Parameter.set_parameters token classification."""

    def testScriptNameIsConsumed(self):
        parameter = Parameter(["./tool"])
        self.assertEqual(parameter.script_name, "./tool")
        self.assertIsNone(parameter.command_name)
        self.assertEqual(parameter.parameters, [])
        self.assertEqual(parameter.positionals, [])

    def testEmptyTokenList(self):
        parameter = Parameter([])
        self.assertIsNone(parameter.script_name)
        self.assertIsNone(parameter.command_name)

    def testFirstBareTokenIsCommandName(self):
        parameter = Parameter(["./tool", "build", "src", "dst"])
        self.assertEqual(parameter.command_name, "build")
        self.assertEqual(parameter.positionals, ["src", "dst"])

    def testOptionsDoNotTakeCommandName(self):
        parameter = Parameter(["./tool", "--verbose", "-q", "build"])
        self.assertEqual(parameter.command_name, "build")
        self.assertEqual(parameter.positionals, [])

    def testLongOptionWithoutValueIsTrue(self):
        parameter = Parameter(["./tool", "--opt"])
        self.assertIs(parameter.long_options["opt"], True)

    def testLongOptionWithValue(self):
        parameter = Parameter(["./tool", "--opt=value"])
        self.assertEqual(parameter.long_options, {"opt": "value"})

    def testLongOptionWithEmptyValue(self):
        parameter = Parameter(["./tool", "--opt="])
        self.assertEqual(parameter.long_options, {"opt": ""})

    def testLongOptionSplitsOnFirstEquals(self):
        parameter = Parameter(["./tool", "--define=key=value"])
        self.assertEqual(parameter.long_options, {"define": "key=value"})

    def testLongOptionLastOccurrenceWins(self):
        parameter = Parameter(["./tool", "--level=1", "--level=2"])
        self.assertEqual(parameter.long_options, {"level": "2"})

    def testFlagCluster(self):
        parameter = Parameter(["./tool", "-abc"])
        self.assertEqual(parameter.flag_options, {"a": True, "b": True, "c": True})

    def testFlagClusterWithValueStopsScanning(self):
        parameter = Parameter(["./tool", "-ab=c"])
        self.assertEqual(parameter.flag_options, {"a": True, "b": "c"})

    def testFlagValueKeepsRemainderOfToken(self):
        parameter = Parameter(["./tool", "-abc=d"])
        self.assertEqual(parameter.flag_options, {"a": True, "b": True, "c": "d"})

        parameter = Parameter(["./tool", "-a=b=c"])
        self.assertEqual(parameter.flag_options, {"a": "b=c"})

    def testSingleFlag(self):
        parameter = Parameter(["./tool", "-a"])
        self.assertEqual(parameter.flag_options, {"a": True})

    def testFlagWithEmptyValue(self):
        parameter = Parameter(["./tool", "-a="])
        self.assertEqual(parameter.flag_options, {"a": ""})

    def testLoneDashHasNoFlags(self):
        parameter = Parameter(["./tool", "-"])
        self.assertEqual(parameter.flag_options, {})
        self.assertEqual(parameter.positionals, [])

    def testReparseStartsFresh(self):
        parameter = Parameter(["./tool", "first", "-a", "--long", "x"])
        parameter.disable_command_name()
        parameter.set_parameters(["./other", "second"])

        self.assertEqual(parameter.script_name, "./other")
        self.assertEqual(parameter.command_name, "second")
        self.assertEqual(parameter.flag_options, {})
        self.assertEqual(parameter.long_options, {})
        self.assertEqual(parameter.positionals, [])
        self.assertTrue(parameter.command_name_enabled)

    def testStateIsReadOnlyCopy(self):
        parameter = Parameter(["./tool", "build", "src"])
        parameter.positionals.append("injected")
        parameter.long_options["injected"] = True
        self.assertEqual(parameter.positionals, ["src"])
        self.assertEqual(parameter.long_options, {})
        with self.assertRaises(AttributeError):
            parameter.command_name = "other"  # type: ignore[misc]

    def testStringTokensRejected(self):
        with self.assertRaises(TypeError):
            Parameter("./tool build")  # type: ignore[arg-type]

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            Parameter(["./tool", 1])  # type: ignore[list-item]

    def testNonIterableRejected(self):
        with self.assertRaises(TypeError):
            Parameter(42)  # type: ignore[arg-type]

    def testParseIsLogged(self):
        with self.assertLogs("commando.parameters", "DEBUG") as captured:
            Parameter(["./tool", "build"])
        self.assertTrue(any("build" in line for line in captured.output))


class TestCommandNameToggle(TestCase):
    """Behavioral tests for enable_command_name/disable_command_name."""

    def testDisableFoldsCommandNameIntoPositionals(self):
        parameter = Parameter(["./tool", "build", "src"])
        parameter.disable_command_name()
        self.assertFalse(parameter.command_name_enabled)
        self.assertEqual(parameter.positionals, ["build", "src"])
        self.assertEqual(parameter.command_name, "build")

    def testRoundTripRestoresState(self):
        parameter = Parameter(["./tool", "build", "src", "dst"])
        parameter.disable_command_name()
        parameter.enable_command_name()
        self.assertTrue(parameter.command_name_enabled)
        self.assertEqual(parameter.command_name, "build")
        self.assertEqual(parameter.positionals, ["src", "dst"])

    def testDisableIsIdempotent(self):
        parameter = Parameter(["./tool", "build", "src"])
        parameter.disable_command_name()
        parameter.disable_command_name()
        self.assertEqual(parameter.positionals, ["build", "src"])

    def testEnableWhileEnabledChangesNothing(self):
        parameter = Parameter(["./tool", "build", "build"])
        parameter.enable_command_name()
        self.assertEqual(parameter.positionals, ["build"])

    def testToggleWithoutCommandName(self):
        parameter = Parameter(["./tool", "--opt"])
        parameter.disable_command_name()
        self.assertEqual(parameter.positionals, [])
        parameter.enable_command_name()
        self.assertEqual(parameter.positionals, [])

    def testReparseReenablesCommandName(self):
        parameter = Parameter(["./tool"])
        parameter.disable_command_name()
        self.assertFalse(parameter.command_name_enabled)
        parameter.set_parameters(["./tool", "build"])
        self.assertTrue(parameter.command_name_enabled)
        self.assertEqual(parameter.command_name, "build")

    def testArgumentIndicesFollowMode(self):
        arguments = [Argument("first"), Argument("second")]

        parameter = Parameter(["./tool", "build", "src"])
        parameter.disable_command_name()
        parameter.bind_arguments(arguments)
        self.assertEqual(parameter.get_arguments(), {"first": "build", "second": "src"})

        parameter.enable_command_name()
        parameter.bind_arguments(arguments)
        self.assertEqual(parameter.get_arguments(), {"first": "src", "second": None})


class TestArgumentBinding(TestCase):
    """Behavioral tests for bind_arguments and argument resolution."""

    def testArgumentsBoundByOrder(self):
        parameter = Parameter(["./tool", "build", "one", "two"])
        first, second = Argument("first"), Argument("second")
        parameter.bind_arguments([first, second])

        self.assertEqual((first.order, second.order), (0, 1))
        self.assertEqual(parameter.get_argument("first"), "one")
        self.assertEqual(parameter.get_argument("second"), "two")

    def testMissingOptionalArgumentFallsBackToDefault(self):
        parameter = Parameter(["./tool", "build"])
        parameter.bind_arguments([Argument("target", default="all")])
        self.assertEqual(parameter.get_argument("target"), "all")

    def testUnknownArgumentIsNone(self):
        parameter = Parameter(["./tool", "build", "one"])
        parameter.bind_arguments([Argument("first")])
        self.assertIsNone(parameter.get_argument("missing"))

    def testMissingRequiredArgumentRaises(self):
        parameter = Parameter(["./tool", "build", "one"])
        arguments = [Argument("a", PARAMETER_REQUIRED), Argument("b", PARAMETER_REQUIRED)]

        with self.assertRaises(MissingRequiredArgumentError) as context:
            parameter.bind_arguments(arguments)

        self.assertEqual(str(context.exception), "Required argument with index #1 'b' not provided.")
        self.assertEqual(context.exception.order, 1)
        self.assertEqual(context.exception.name, "b")

    def testRequiredCheckRunsAfterAllAreBound(self):
        parameter = Parameter(["./tool", "build"])
        first, second = Argument("a", PARAMETER_REQUIRED), Argument("b", default="x")

        with self.assertRaises(MissingRequiredArgumentError):
            parameter.bind_arguments([first, second])

        self.assertEqual(second.order, 1)
        self.assertFalse(second.has_been_provided)

    def testRebindResetsProvidedState(self):
        argument = Argument("a")
        parameter = Parameter(["./tool", "build", "one"])
        parameter.bind_arguments([argument])
        self.assertTrue(argument.has_been_provided)

        parameter.set_parameters(["./tool", "build"])
        parameter.bind_arguments([argument])
        self.assertFalse(argument.has_been_provided)
        self.assertIsNone(argument.provided)

    def testNonArgumentRejected(self):
        parameter = Parameter(["./tool"])
        with self.assertRaises(ConfigurationError) as context:
            parameter.set_command_arguments([Argument("a"), "b"])  # type: ignore[list-item]
        self.assertEqual(
            str(context.exception),
            "Arguments must be instances of Argument. The item at index 1 is not.",
        )

    def testGetArgumentsMapsEveryDeclaration(self):
        parameter = Parameter(["./tool", "build", "one"])
        parameter.bind_arguments([Argument("first"), Argument("second", default=2)])
        self.assertEqual(parameter.get_arguments(), {"first": "one", "second": 2})


class TestOptionBinding(TestCase):
    """Behavioral tests for bind_options and option resolution."""

    def testLongOptionBound(self):
        parameter = Parameter(["./tool", "--name=value"])
        option = Option("name")
        parameter.bind_options([option])
        self.assertTrue(option.has_been_provided)
        self.assertEqual(option.provided, "value")
        self.assertEqual(parameter.get_option("name"), "value")

    def testFlagOptionReadsFlagMapOnly(self):
        parameter = Parameter(["./tool", "--v", "-q"])
        verbose, quiet = Option("v", flag=True), Option("q")
        parameter.bind_options([verbose, quiet])
        self.assertFalse(verbose.has_been_provided)
        self.assertFalse(quiet.has_been_provided)

    def testAbsentOptionFallsBackToDefault(self):
        parameter = Parameter(["./tool"])
        parameter.bind_options([Option("level", default="1")])
        self.assertEqual(parameter.get_option("level"), "1")

    def testBareOptionWithoutDefaultIsTrue(self):
        parameter = Parameter(["./tool", "--option"])
        parameter.bind_options([Option("option")])
        self.assertIs(parameter.get_option("option"), True)

    def testBareOptionWithDefaultIsDefault(self):
        parameter = Parameter(["./tool", "--option"])
        parameter.bind_options([Option("option", default="fallback")])
        self.assertEqual(parameter.get_option("option"), "fallback")

    def testZeroStringValueIsKept(self):
        parameter = Parameter(["./tool", "--option=0"])
        parameter.bind_options([Option("option")])
        self.assertEqual(parameter.get_option("option"), "0")

    def testZeroStringSatisfiesRequiredValue(self):
        parameter = Parameter(["./tool", "--option=0"])
        parameter.bind_options([Option("option", OPTION_VALUE_REQUIRED)])
        self.assertEqual(parameter.get_option("option"), "0")

    def testAbsentOptionWithoutDefaultIsNone(self):
        parameter = Parameter(["./tool"])
        parameter.bind_options([Option("option")])
        self.assertIsNone(parameter.get_option("option"))

    def testUnknownOptionIsNone(self):
        parameter = Parameter(["./tool", "--option"])
        parameter.bind_options([])
        self.assertIsNone(parameter.get_option("option"))

    def testRequiredFlagValueMissingRaises(self):
        parameter = Parameter(["./tool", "-a"])
        with self.assertRaises(MissingRequiredOptionValueError) as context:
            parameter.bind_options([Option("a", OPTION_VALUE_REQUIRED, flag=True)])
        self.assertEqual(str(context.exception), "Option '-a' requires a value, which is not provided.")
        self.assertEqual(context.exception.dashes, "-")
        self.assertEqual(context.exception.name, "a")

    def testRequiredLongValueEmptyRaises(self):
        parameter = Parameter(["./tool", "--output="])
        with self.assertRaises(MissingRequiredOptionValueError) as context:
            parameter.bind_options([Option("output", OPTION_VALUE_REQUIRED)])
        self.assertEqual(str(context.exception), "Option '--output' requires a value, which is not provided.")

    def testRequiredValueSatisfiedByDefault(self):
        parameter = Parameter(["./tool", "--output"])
        parameter.bind_options([Option("output", OPTION_VALUE_REQUIRED, default="out.txt")])
        self.assertEqual(parameter.get_option("output"), "out.txt")

    def testRequiredValueOptionMayBeAbsent(self):
        parameter = Parameter(["./tool"])
        parameter.bind_options([Option("output", OPTION_VALUE_REQUIRED)])
        self.assertIsNone(parameter.get_option("output"))

    def testOptionsAcceptMapping(self):
        parameter = Parameter(["./tool", "--a=1", "-b"])
        parameter.bind_options({"first": Option("a"), "second": Option("b", flag=True)})
        self.assertEqual(parameter.get_options(), {"a": "1", "b": True})

    def testOptionsAreReplacedOnRebind(self):
        parameter = Parameter(["./tool", "--a=1"])
        parameter.bind_options([Option("a")])
        parameter.bind_options([Option("b")])
        self.assertEqual(list(parameter.get_options()), ["b"])

    def testNonOptionRejected(self):
        parameter = Parameter(["./tool"])
        with self.assertRaises(ConfigurationError) as context:
            parameter.set_command_options({"bad": Argument("bad")})  # type: ignore[dict-item]
        self.assertEqual(str(context.exception), "Options must be instances of Option. bad is not.")


if __name__ == "__main__":
    unittest.main()
