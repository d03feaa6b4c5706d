"""Name-based lookup of survival scorers.

Scorers are stored as factories so a name plus keyword arguments is enough to
build one. The optimizers resolve ``survival="nsga3"`` or ``survival="agemoea"``
through this registry, and user scorers can be added the same way:

    ```python
    from niche_forge.registry import SurvivalRegistry

    def distance_factory(order: float = 2.0):
        def scorer(objectives, fronts, n_survive, *, ideal_point,
                   normalization, extreme, rng):
            shifted = (objectives - ideal_point) / normalization
            return -np.linalg.norm(shifted, ord=order, axis=1)
        return scorer

    SurvivalRegistry.register("distance", distance_factory)
    optimizer = NSGA3(survival="distance")
    ```
"""

from collections.abc import Callable

from niche_forge.protocols import SurvivalScorer

SurvivalFactory = Callable[..., SurvivalScorer]


class SurvivalRegistry:
    """Class-level mapping from strategy name to scorer factory.

    Registering an existing name replaces the previous factory.
    """

    _registry: dict[str, SurvivalFactory] = {}

    @classmethod
    def register(cls, name: str, factory: SurvivalFactory) -> None:
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> SurvivalScorer:
        """Build the scorer registered under name.

        Args:
            name: Registered strategy name.
            **kwargs: Forwarded to the factory, e.g. ``reference_directions``
                for "nsga3".

        Raises:
            KeyError: If nothing is registered under name. The message lists
                the registered names.
        """
        try:
            factory = cls._registry[name]
        except KeyError:
            registered = ", ".join(cls.list()) or "none"
            raise KeyError(f"unknown survival strategy '{name}', registered: {registered}") from None
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Registered names in alphabetical order."""
        return sorted(cls._registry)


def list_survivals() -> list[str]:
    """Shorthand for SurvivalRegistry.list()."""
    return SurvivalRegistry.list()
