"""Validation and repair utilities for RouteRequest parsing."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from walkify.config.place_types import Category
from walkify.models.request import RouteRequest

MIN_STOP_COUNT = 2
MAX_STOP_COUNT = 10
DEFAULT_STOP_COUNT = 6


class RouteRequestValidator:
    """Validate and repair raw parser output into a RouteRequest instance."""

    def validate(self, payload: Dict[str, object]) -> RouteRequest:
        return RouteRequest.model_validate(self._repair(payload))

    def _repair(self, payload: Dict[str, object]) -> Dict[str, object]:
        data: Dict[str, object] = {}

        data["destination_name"] = self._clean_name(payload.get("destination_name"))
        # A recognised name always wins over an inferred category
        if data["destination_name"]:
            data["destination_category"] = None
        else:
            data["destination_category"] = self._normalize_category(payload.get("destination_category"))

        data["waypoint_categories"] = self._normalize_categories(
            payload.get("waypoint_categories"), exclude=data["destination_category"]
        )
        data["waypoint_names"] = self._normalize_names(payload.get("waypoint_names"))
        data["target_distance_km"] = self._positive_float(payload.get("target_distance_km"))
        data["is_exploration"] = bool(payload.get("is_exploration", False))
        data["desired_stop_count"] = self._clamped_int(
            payload.get("desired_stop_count"),
            minimum=MIN_STOP_COUNT,
            maximum=MAX_STOP_COUNT,
            default=DEFAULT_STOP_COUNT,
        )

        return data

    @staticmethod
    def _clean_name(value: object) -> Optional[str]:
        if not isinstance(value, str):
            return None
        cleaned = " ".join(value.split()).strip(" ,.;!?")
        return cleaned or None

    @staticmethod
    def _normalize_category(value: object) -> Optional[Category]:
        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            try:
                return Category(value.strip().lower())
            except ValueError:
                return None
        return None

    def _normalize_categories(self, value: object, *, exclude: Optional[Category]) -> List[Category]:
        if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
            return []
        normalized: List[Category] = []
        for item in value:
            category = self._normalize_category(item)
            if category is None or category == exclude or category in normalized:
                continue
            normalized.append(category)
        return normalized

    def _normalize_names(self, value: object) -> List[str]:
        if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
            return []
        names: List[str] = []
        for item in value:
            name = self._clean_name(item)
            if name and name not in names:
                names.append(name)
        return names

    @staticmethod
    def _positive_float(value: object) -> Optional[float]:
        try:
            if value is None:
                return None
            num = float(value)
            if num <= 0:
                return None
            return round(num, 3)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _clamped_int(value: object, *, minimum: int, maximum: int, default: int) -> int:
        try:
            if value is None:
                return default
            num = int(value)
        except (TypeError, ValueError):
            return default
        return max(minimum, min(maximum, num))
