"""Shared enum helpers."""

from __future__ import annotations

from enum import Enum


class ChoiceEnum(Enum):
    """Menu-style enum that can also be picked by case-insensitive name."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None
