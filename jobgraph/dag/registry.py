"""
Runner Registry

Maps runner type names to factories so the runtime can pick a runner
from configuration.
"""

import inspect
from typing import Any, Callable, Dict
import logging

from .graph import JobRunner

logger = logging.getLogger(__name__)

RunnerFactory = Callable[..., JobRunner]


class RunnerRegistry:
    """
    Runner factories by type name.

    The runtime hands every runner the same settings (delay, ...). create()
    passes a factory only the keyword parameters its signature declares,
    and reports a missing required parameter as a configuration error.

    Example usage:
        registry = RunnerRegistry()
        registry.register("console", create_console_runner)

        runner = registry.create("console", delay=0.5)
        "console" in registry  # True
    """

    def __init__(self):
        self._factories: Dict[str, RunnerFactory] = {}

    def register(self, runner_type: str, factory: RunnerFactory) -> None:
        """
        Raises:
            TypeError: If factory is not callable
        """
        if not callable(factory):
            raise TypeError(f"Factory for runner type '{runner_type}' is not callable: {factory!r}")
        if runner_type in self._factories:
            logger.warning(f"Replacing factory for runner type '{runner_type}'")

        self._factories[runner_type] = factory
        logger.debug(f"Registered runner type '{runner_type}'")

    def create(self, runner_type: str, **settings: Any) -> JobRunner:
        """
        Create a runner, passing along the settings its factory accepts.

        Raises:
            ValueError: If runner_type is unknown or the settings do not
                        satisfy the factory's required parameters
        """
        factory = self._factories.get(runner_type)
        if factory is None:
            raise ValueError(
                f"Unknown runner type '{runner_type}' "
                f"(registered: {', '.join(self._factories) or 'none'})"
            )

        params = self._accepted(factory, settings)
        try:
            inspect.signature(factory).bind(**params)
        except TypeError as e:
            raise ValueError(f"Cannot create runner '{runner_type}' with {params}: {e}") from e

        logger.info(f"Using runner '{runner_type}' with {params}")
        return factory(**params)

    @staticmethod
    def _accepted(factory: RunnerFactory, settings: Dict[str, Any]) -> Dict[str, Any]:
        parameters = inspect.signature(factory).parameters.values()
        if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters):
            return dict(settings)

        names = {
            p.name for p in parameters
            if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
        }
        dropped = sorted(set(settings) - names)
        if dropped:
            logger.debug(f"Runner factory {factory.__name__} ignores settings: {dropped}")
        return {k: v for k, v in settings.items() if k in names}

    def list_types(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, runner_type: object) -> bool:
        return runner_type in self._factories
