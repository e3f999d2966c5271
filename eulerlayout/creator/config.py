"""Process-wide default creator options."""

from __future__ import annotations

import copy

from .model import CreatorOptions

_CREATOR_OPTIONS = CreatorOptions()


def get_creator_options() -> CreatorOptions:
    return copy.deepcopy(_CREATOR_OPTIONS)


def set_creator_options(options: CreatorOptions) -> None:
    global _CREATOR_OPTIONS
    _CREATOR_OPTIONS = copy.deepcopy(options)
