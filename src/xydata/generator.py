"""
Generator core: frozen options, a point-producing strategy and the builder API.

A `DataGenerator` is one immutable configuration (options + strategy + random
source) plus a private `Cursor`. Generator families are not subclasses; they
are `GeneratorStrategy` objects selected at construction time.
"""
from __future__ import annotations

import asyncio
import functools
import logging
import random
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import GenerationCancelled, GeneratorBusyError
from .scheduling import CooperativeScheduler, GenerationToken, ProductionTask

if TYPE_CHECKING:  # pragma: no cover
    from .stream import Stream

logger = logging.getLogger(__name__)

P = TypeVar("P")
O = TypeVar("O", bound="GeneratorOptions")

_UNSET: Any = object()


class GeneratorOptions(BaseModel):
    """Base for per-family options: frozen, every field defaulted, None means default."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_none(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data


@dataclass
class Cursor:
    """
    Private production position of one generator instance.

    `seed` is the point treated as coming right before index 0 of the current
    pass, `previous` the last produced point. `state` holds per-pass scratch
    values and is emptied at the start and end of every pass.
    """

    rng: random.Random
    seed: Any = None
    previous: Any = None
    index: int = 0
    produced: int = 0
    state: Dict[str, Any] = field(default_factory=dict)

    def begin_pass(self) -> None:
        if self.produced:
            self.seed = self.previous
        self.index = 0
        self.state.clear()

    def end_pass(self) -> None:
        self.state.clear()

    def advance(self, point: Any) -> None:
        self.previous = point
        self.index += 1
        self.produced += 1

    @property
    def last(self) -> Any:
        """The previous point, or the seed before anything was produced."""
        return self.previous if self.previous is not None else self.seed


class GeneratorStrategy(ABC, Generic[P, O]):
    """
    Point-producing strategy of one generator family.

    `produce_point` must derive its ordering dimension (x, timestamp) from
    `cursor.seed` when one is present so that a pass seeded with
    `continuation_seed(...)` continues the previous window seamlessly.
    """

    name: ClassVar[str] = ""
    options_model: ClassVar[Type[GeneratorOptions]] = GeneratorOptions
    # Extra builders beyond `set_<field>`: name -> callable(options, *args) returning a patch.
    builders: ClassVar[Dict[str, Callable[..., Dict[str, Any]]]] = {}

    @abstractmethod
    def point_count(self, options: O) -> int:
        """Number of points in one finite pass."""

    @abstractmethod
    def produce_point(self, options: O, cursor: Cursor) -> P:
        """Produce the point at `cursor.index`."""

    def continuation_seed(self, options: O, last_point: P, window: Sequence[P]) -> P:
        """Point to treat as the one before index 0 of the next window."""
        return last_point

    def point_weight(self, options: O) -> int:
        """Scalar elements in one point, used for pacing."""
        return 1


class DataGenerator(Generic[P, O]):
    """
    Immutable generator instance.

    Every builder (`with_options`, `set_<field>`, `with_random_source`,
    `continued_from`) returns a new instance with its own fresh cursor; the
    receiver is never changed. `set_<field>(value)` exists for every field of
    the family's options model. Sequence values are stored as tuples, so
    `set_input_data([1, 2]).options.input_data == (1, 2)`.
    """

    def __init__(
        self,
        strategy: GeneratorStrategy[P, O],
        options: O | Mapping[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
        seed: P | None = None,
        scheduler: CooperativeScheduler | None = None,
    ):
        options_model = strategy.options_model
        if options is None:
            options = options_model()
        elif not isinstance(options, options_model):
            options = options_model.model_validate(dict(options))
        self._strategy = strategy
        self._options: O = options  # type: ignore[assignment]
        self._rng = rng if rng is not None else random.Random()
        self._seed = seed
        self._scheduler = scheduler
        self._point_count = max(int(strategy.point_count(self._options)), 0)
        self._cursor = Cursor(rng=self._rng, seed=seed)
        self._busy = False

    @property
    def options(self) -> O:
        return self._options

    @property
    def strategy(self) -> GeneratorStrategy[P, O]:
        return self._strategy

    @property
    def random_source(self) -> random.Random:
        return self._rng

    @property
    def seed(self) -> Optional[P]:
        return self._seed

    @property
    def scheduler(self) -> CooperativeScheduler:
        if self._scheduler is None:
            self._scheduler = CooperativeScheduler()
        return self._scheduler

    def point_count(self) -> int:
        return self._point_count

    def produce_point(self, index: int) -> P:
        cursor = self._cursor
        cursor.index = index
        point = self._strategy.produce_point(self._options, cursor)
        cursor.advance(point)
        return point

    def continuation_seed(self, last_point: P, window: Sequence[P]) -> P:
        return self._strategy.continuation_seed(self._options, last_point, window)

    def generate_finite(self) -> List[P]:
        """Produce one full window synchronously, without yielding."""
        with self._pass():
            return self.scheduler.run_to_completion(self._task())

    async def generate(self, token: GenerationToken | None = None) -> List[P]:
        """Produce one full window, yielding to the event loop on long passes."""
        with self._pass():
            return await self.scheduler.run(self._task(), token)

    # builders ---------------------------------------------------------------

    def with_options(self, **patch: Any) -> "DataGenerator[P, O]":
        options_model = type(self._options)
        unknown = sorted(set(patch) - set(options_model.model_fields))
        if unknown:
            raise ValueError(
                f"Unknown option(s) for {self._strategy.name}: {', '.join(unknown)}"
            )
        options = options_model.model_validate({**dict(self._options), **patch})
        return self._derive(options=options)

    def with_random_source(self, rng: random.Random) -> "DataGenerator[P, O]":
        return self._derive(rng=rng)

    def with_scheduler(self, scheduler: CooperativeScheduler) -> "DataGenerator[P, O]":
        return self._derive(scheduler=scheduler)

    def continued_from(self, seed: P | None) -> "DataGenerator[P, O]":
        """Same configuration, first pass starting right after `seed`."""
        return self._derive(seed=seed)

    def to_stream(self, **stream_options: Any) -> "Stream[P]":
        from .stream import Stream

        return Stream(self, **stream_options)

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not found normally: resolves set_<field> builders.
        options = self.__dict__.get("_options")
        strategy = self.__dict__.get("_strategy")
        if options is not None and name.startswith("set_"):
            field_name = name[len("set_"):]
            if field_name in type(options).model_fields:
                return functools.partial(self._set_field, field_name)
            builder = strategy.builders.get(name) if strategy is not None else None
            if builder is not None:
                return functools.partial(self._apply_builder, builder)
        raise AttributeError(f"{type(self).__name__!s} object has no attribute {name!r}")

    def __dir__(self) -> List[str]:
        names = set(super().__dir__())
        names.update(f"set_{name}" for name in type(self._options).model_fields)
        names.update(self._strategy.builders)
        return sorted(names)

    def __repr__(self) -> str:
        return f"DataGenerator({self._strategy.name!r}, {self._options!r})"

    # internals --------------------------------------------------------------

    def _set_field(self, field_name: str, value: Any) -> "DataGenerator[P, O]":
        return self.with_options(**{field_name: value})

    def _apply_builder(self, builder: Callable[..., Dict[str, Any]], *args: Any, **kwargs: Any) -> "DataGenerator[P, O]":
        return self.with_options(**builder(self._options, *args, **kwargs))

    def _derive(
        self,
        *,
        options: O | None = None,
        rng: random.Random | None = None,
        seed: Any = _UNSET,
        scheduler: CooperativeScheduler | None = None,
    ) -> "DataGenerator[P, O]":
        return DataGenerator(
            self._strategy,
            options if options is not None else self._options,
            rng=rng if rng is not None else self._rng,
            seed=self._seed if seed is _UNSET else seed,
            scheduler=scheduler if scheduler is not None else self._scheduler,
        )

    def _task(self) -> ProductionTask:
        return ProductionTask(
            produce=self.produce_point,
            total=self._point_count,
            weight=max(int(self._strategy.point_weight(self._options)), 1),
        )

    @contextmanager
    def _pass(self) -> Iterator[None]:
        if self._busy:
            raise GeneratorBusyError(
                f"{self._strategy.name} generator is already producing a window"
            )
        cursor = self._cursor
        snapshot = (cursor.seed, cursor.previous, cursor.produced)
        self._busy = True
        cursor.begin_pass()
        try:
            yield
        except (GenerationCancelled, asyncio.CancelledError):
            # Abandoned passes leave no trace on the cursor.
            logger.debug("Discarding abandoned %s pass", self._strategy.name)
            cursor.seed, cursor.previous, cursor.produced = snapshot
            raise
        finally:
            cursor.end_pass()
            self._busy = False
