"""
Commando command container.

The Application can register commands lazily by name and an identifier; the
container is the collaborator that turns such an identifier into an instance the
first time the command is needed.

Identifiers
- a callable (usually a Command subclass): called with no arguments.
- a string "package.module:Attr" or "package.module.Attr": imported with
  importlib (see utils.locate) and then called with no arguments.

Instances are cached per container and identifier, so repeated construction
requests hand back the same object.
"""
import logging

from .faults import ConfigurationError
from .utils import locate

logger = logging.getLogger(__name__)


class Container:
    """
    Minimal construct-and-cache container.

    Any object providing construct(identifier) can stand in for it when handed
    to Application(container=...).
    """

    def __init__(self):
        self._instances = {}

    def has(self, identifier, /):
        """Return whether an instance for identifier was already constructed."""
        return identifier in self._instances

    def construct(self, identifier, /):
        """
        Build (or return the cached) instance for identifier.

        Raises
        - ConfigurationError: when a string identifier cannot be imported, or
          the resolved object is not callable.
        """
        try:
            return self._instances[identifier]
        except KeyError:
            pass

        factory = identifier
        if isinstance(identifier, str):
            try:
                factory = locate(identifier)
            except (ValueError, ImportError, AttributeError) as error:
                raise ConfigurationError(
                    "Command %r could not be located." % identifier,
                    hint="use a 'package.module:Class' reference to an importable command class",
                    identifier=identifier,
                ) from error

        if not callable(factory):
            raise ConfigurationError(
                "Command %r cannot be constructed, it is not callable." % (identifier,),
                hint="register a Command subclass or a factory returning a Command",
                identifier=identifier,
            )

        logger.debug("constructing %r", identifier)
        instance = self._instances[identifier] = factory()
        return instance


__all__ = (
    "Container",
)
