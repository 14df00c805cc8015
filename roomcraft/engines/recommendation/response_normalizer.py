"""
Response Normalizer

Turns the recommender model's free text into Recommendation objects bound to
canonical catalog products.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import ValidationError

from roomcraft.core.exceptions import ResponseParseError
from roomcraft.schemas.products import Product
from roomcraft.utils.json_text import loads_model_json

from .schemas import Recommendation

logger = logging.getLogger(__name__)

DEFAULT_MATCH_SCORE = 0.8
DEFAULT_REASONING = "Recommended based on room analysis"
MAX_SUGGESTED_COMBINATIONS = 2


@dataclass(frozen=True)
class RecommendationArray:
    """Model answered with a bare JSON array"""

    entries: List[Any] = field(default_factory=list)
    shape: Literal["array"] = "array"


@dataclass(frozen=True)
class RecommendationEnvelope:
    """Model answered with {"recommendations": [...]}"""

    entries: List[Any] = field(default_factory=list)
    shape: Literal["envelope"] = "envelope"


ModelPayload = Union[RecommendationArray, RecommendationEnvelope]


def parse_payload(raw_text: str) -> ModelPayload:
    """
    Parse raw model text into one of the accepted payload shapes

    Raises:
        ResponseParseError: text is not JSON, or JSON of an unknown shape
    """
    try:
        data = loads_model_json(raw_text)
    except ValueError as e:
        raise ResponseParseError(f"Model output is not valid JSON: {e}") from e

    if isinstance(data, list):
        return RecommendationArray(entries=data)

    if isinstance(data, dict) and isinstance(data.get("recommendations"), list):
        return RecommendationEnvelope(entries=data["recommendations"])

    raise ResponseParseError(f"Unexpected model payload type: {type(data).__name__}")


def _name_key(name: Any) -> Optional[str]:
    if not isinstance(name, str):
        return None
    key = name.strip().lower()
    return key or None


def _index_by_name(products: List[Product]) -> Dict[str, Product]:
    index: Dict[str, Product] = {}
    for product in products:
        # First product with a given name wins
        index.setdefault(product.name.strip().lower(), product)
    return index


def _as_finite_number(value: Any) -> Optional[float]:
    """Numeric JSON value as a finite float; None for NaN, infinities and non-numbers"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # Integers too large for a float
        return None
    return number if math.isfinite(number) else None


def _coerce_score(value: Any) -> float:
    number = _as_finite_number(value)
    if number is None:
        return DEFAULT_MATCH_SCORE
    return min(max(number, 0.0), 1.0)


def _coerce_rank(value: Any, fallback: int) -> int:
    number = _as_finite_number(value)
    if number is None or number < 1:
        return fallback
    return int(number)


class ResponseNormalizer:
    """Maps parsed model entries back to catalog products"""

    def normalize(
        self,
        raw_text: str,
        candidates: List[Product],
        catalog: List[Product],
    ) -> List[Recommendation]:
        """
        Normalize raw model text into recommendations

        Args:
            raw_text: Model output, possibly fenced in markdown
            candidates: Filtered products; primary names resolve only here
            catalog: Full catalog snapshot; suggested combinations resolve here

        Returns:
            Recommendations in model order. Entries whose product cannot be
            resolved are dropped.

        Raises:
            ResponseParseError: the payload itself cannot be parsed
        """
        payload = parse_payload(raw_text)
        candidate_index = _index_by_name(candidates)
        catalog_index = _index_by_name(catalog)

        recommendations: List[Recommendation] = []
        seen_ids = set()
        dropped = 0

        for entry in payload.entries:
            if not isinstance(entry, dict):
                dropped += 1
                continue

            key = _name_key(entry.get("productName"))
            product = candidate_index.get(key) if key else None
            if product is None or product.id in seen_ids:
                dropped += 1
                continue

            reasoning = entry.get("reasoning")
            if not isinstance(reasoning, str) or not reasoning.strip():
                reasoning = DEFAULT_REASONING

            try:
                recommendation = Recommendation(
                    product=product,
                    rank=_coerce_rank(entry.get("rank"), len(recommendations) + 1),
                    reasoning=reasoning,
                    match_score=_coerce_score(entry.get("matchScore")),
                    suggested_combinations=self._resolve_combinations(
                        entry.get("suggestedCombinations"), product, catalog_index
                    ),
                )
            except ValidationError as e:
                logger.warning(f"Dropping recommendation for {product.name}: {e}")
                dropped += 1
                continue

            recommendations.append(recommendation)
            seen_ids.add(product.id)

        logger.info(
            f"Normalized {len(recommendations)} recommendations from {payload.shape} payload "
            f"({dropped} entries dropped)"
        )
        return recommendations

    def _resolve_combinations(
        self,
        names: Any,
        product: Product,
        catalog_index: Dict[str, Product],
    ) -> List[str]:
        if not isinstance(names, list):
            return []

        resolved: List[str] = []
        for name in names:
            key = _name_key(name)
            match = catalog_index.get(key) if key else None
            if match is None or match.id == product.id or match.name in resolved:
                continue
            resolved.append(match.name)
            if len(resolved) == MAX_SUGGESTED_COMBINATIONS:
                break
        return resolved


response_normalizer = ResponseNormalizer()
