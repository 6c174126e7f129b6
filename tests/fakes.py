from typing import Any, Callable, Dict, List, Sequence, Tuple

from geoextents.constructs.envelope import Envelope
from geoextents.exceptions import CRSResolutionError, TransformError
from geoextents.referencing.resolver_interface import CRSResolverInterface
from geoextents.referencing.transformer_interface import TransformerInterface

DEFAULT = "CRS84"


class FakeResolver(CRSResolverInterface):
    """Resolves identifiers to themselves; 'UNKNOWN:...' identifiers fail."""

    @property
    def default_crs(self) -> Any:
        return DEFAULT

    def resolve(self, identifier: str) -> Any:
        if identifier.startswith("UNKNOWN"):
            raise CRSResolutionError(f"Could not resolve CRS identifier: {identifier!r}")
        return identifier

    def identify(self, crs: Any) -> str:
        return f"urn:fake:{crs}"


class FakeTransformer(TransformerInterface):
    """Applies a per-ordinate function registered for each (source, target) pair."""

    def __init__(self, functions: Dict[Tuple[Any, Any], Callable[[float], float]]):
        self.functions = functions
        self.calls: List[Tuple[Envelope, Any]] = []

    def _function(self, source_crs, target_crs):
        try:
            return self.functions[(source_crs, target_crs)]
        except KeyError as e:
            raise TransformError(f"no path from {source_crs} to {target_crs}") from e

    def transform_envelope(self, envelope: Envelope, target_crs: Any) -> Envelope:
        self.calls.append((envelope, target_crs))
        f = self._function(envelope.crs, target_crs)
        return Envelope(
            lower=tuple(f(v) for v in envelope.lower),
            upper=tuple(f(v) for v in envelope.upper),
            crs=target_crs,
        )

    def transform_position(
        self, position: Sequence[float], source_crs: Any, target_crs: Any
    ) -> Tuple[float, ...]:
        f = self._function(source_crs, target_crs)
        return tuple(f(v) for v in position)
