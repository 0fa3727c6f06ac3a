"""
Error classes for clearer exception sources.

Only static-data problems raise; battle resolution reports failures as
typed outcomes and battle text instead.
"""
from __future__ import annotations


class TilemonError(Exception):
    pass


class DataLoadError(TilemonError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail


class ValidationError(TilemonError):
    pass


class UnknownMoveError(TilemonError, KeyError):
    def __init__(self, move_id: str):
        super().__init__(f"Move not found: {move_id}")
        self.move_id = move_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownSpeciesError(TilemonError, KeyError):
    def __init__(self, key: str):
        super().__init__(f"Species not found: {key}")
        self.key = key

    def __str__(self) -> str:
        return self.args[0]
