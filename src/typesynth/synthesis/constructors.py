"""Constructor synthesis: build instances by calling constructors with random arguments.

Used for types that have no registered strategy and cannot be created with
a plain call. Candidates are tried in order and the first one that returns
without raising wins:

1. the parameterless call ``Target()``
2. ``Target(...)`` with an argument synthesized for every annotated parameter
3. alternate constructors, i.e. classmethods annotated to return the class
   (or ``Self``), in declaration order
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Sequence
from typing import Any

from typesynth.reflection.members import get_members, safe_type_hints
from typesynth.reflection.types import runtime_class, type_name, unwrap_annotated
from typesynth.synthesis.models import SynthesisResult

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class _Candidate(typing.NamedTuple):
    """One way of constructing the target."""

    name: str
    function: Callable[..., Any]
    parameters: list[tuple[inspect.Parameter, Any]]  # (parameter, resolved type or None)


def _signature(function: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(function)
    except (TypeError, ValueError):
        return None


def _parameters(
    function: Callable[..., Any], hints_source: Any, target: type
) -> list[tuple[inspect.Parameter, Any]] | None:
    """Pair each parameter of function with its resolved type.

    Annotations that are still strings are resolved through hints_source and
    then through the target's class annotations, which covers dataclasses and
    pydantic models whose parameters mirror their fields.
    """
    signature = _signature(function)
    if signature is None:
        return None

    hints = safe_type_hints(hints_source, include_extras=False) if hints_source else {}
    class_hints = safe_type_hints(target, include_extras=False)
    parameters = []
    for parameter in signature.parameters.values():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        annotation = hints.get(parameter.name)
        if annotation is None and parameter.annotation is not inspect.Parameter.empty:
            if not isinstance(parameter.annotation, str):
                annotation = parameter.annotation
        if annotation is None:
            annotation = class_hints.get(parameter.name)
        if annotation is not None:
            annotation, _ = unwrap_annotated(annotation)
        parameters.append((parameter, annotation))
    return parameters


def _returns_target(function: Callable[..., Any], target: type) -> bool:
    returned = safe_type_hints(function, include_extras=False).get("return")
    return returned is target or returned is typing.Self


class ConstructorSynthesizer:
    """Creates instances by trying constructors with synthesized arguments.

    Args:
        value_factory: Callable producing one value of a given type, used for
            every constructor argument.
    """

    def __init__(self, value_factory: Callable[[Any], Any]):
        self._value_factory = value_factory
        self._in_progress: set[type] = set()

    def synthesize_arguments(self, param_types: Sequence[Any]) -> list[Any]:
        """Produce one value per parameter type."""
        return [self._value_factory(param_type) for param_type in param_types]

    def candidates(self, target: type) -> list[_Candidate]:
        """Constructor candidates for target, in the order they are tried."""
        candidates = [_Candidate("parameterless", target, [])]

        init_parameters = _parameters(target, getattr(target, "__init__", None), target)
        if init_parameters:
            candidates.append(_Candidate("__init__", target, init_parameters))

        for name, attr in vars(target).items():
            if not isinstance(attr, classmethod):
                continue
            if not _returns_target(attr.__func__, target):
                continue
            bound = getattr(target, name)
            parameters = _parameters(bound, attr.__func__, target)
            if parameters is not None:
                candidates.append(_Candidate(name, bound, parameters))

        return candidates

    def _call(self, candidate: _Candidate, excluded: frozenset[str] = frozenset()) -> Any:
        args = []
        kwargs = {}
        skipped = False
        for parameter, annotation in candidate.parameters:
            has_default = parameter.default is not inspect.Parameter.empty
            if has_default and (parameter.name in excluded or annotation is None):
                # Left to its declared default; later arguments go by keyword
                skipped = True
                continue
            if skipped and parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                if has_default:
                    continue
                raise TypeError(f"{parameter.name} cannot follow a skipped parameter")
            value = None if annotation is None else self._value_factory(annotation)
            if parameter.kind in _POSITIONAL and not skipped:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return candidate.function(*args, **kwargs)

    def instantiate(self, target: Any) -> SynthesisResult:
        """Create an instance of target with the first candidate that succeeds.

        Individual candidate failures are logged and swallowed. Exhausting all
        candidates gives a failure result rather than an exception.

        Args:
            target: Class (or generic alias of a class) to instantiate.

        Returns:
            SynthesisResult with the instance, or a failure listing each error.
        """
        cls = runtime_class(target)
        if cls is None:
            return SynthesisResult.failure(f"{type_name(target)} has no runtime class")

        if cls in self._in_progress:
            # An argument of the constructor needs another instance of the same class
            return SynthesisResult.failure(f"{type_name(cls)} is already being constructed")

        attempts: list[str] = []
        errors: list[str] = []
        excluded = frozenset(member.name for member in get_members(cls) if member.excluded)
        self._in_progress.add(cls)
        try:
            for candidate in self.candidates(cls):
                attempts.append(candidate.name)
                try:
                    value = self._call(candidate, excluded)
                except Exception as e:
                    logger.debug(f"Constructor {type_name(cls)}.{candidate.name} failed: {e!r}")
                    errors.append(f"{candidate.name}: {e!r}")
                    continue
                return SynthesisResult.success(value, attempts)
        finally:
            self._in_progress.discard(cls)

        return SynthesisResult.failure("; ".join(errors) or "no candidates", attempts)

    def find_constructor(
        self, target: type, param_types: Sequence[Any]
    ) -> _Candidate | None:
        """The candidate whose positional parameter types equal param_types."""
        wanted = list(param_types)
        for candidate in self.candidates(target):
            positional = [
                annotation
                for parameter, annotation in candidate.parameters
                if parameter.kind in _POSITIONAL
            ]
            if positional == wanted:
                return candidate
        return None

    def invoke(
        self,
        target: Any,
        param_types: Sequence[Any],
        overrides: dict[int, Any] | None = None,
    ) -> SynthesisResult:
        """Call the constructor of target that takes param_types.

        Args:
            target: Class to instantiate.
            param_types: Positional parameter types identifying the constructor.
            overrides: Caller-supplied arguments by position. An override is used
                only when its type is exactly the parameter type at that position.

        Returns:
            SynthesisResult with the instance, or a failure if no constructor
            matches or the constructor raised.
        """
        if param_types is None:
            raise TypeError("param_types must not be None")

        cls = runtime_class(target)
        if cls is None:
            return SynthesisResult.failure(f"{type_name(target)} has no runtime class")

        candidate = self.find_constructor(cls, param_types)
        if candidate is None:
            names = ", ".join(type_name(param_type) for param_type in param_types)
            return SynthesisResult.failure(f"{type_name(cls)} has no constructor ({names})")

        arguments = self.synthesize_arguments(param_types)
        for index, value in (overrides or {}).items():
            if 0 <= index < len(arguments) and type(value) is param_types[index]:
                arguments[index] = value

        try:
            return SynthesisResult.success(candidate.function(*arguments), [candidate.name])
        except Exception as e:
            return SynthesisResult.failure(f"{candidate.name}: {e!r}", [candidate.name])
