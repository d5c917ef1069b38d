"""Shared types for tonekit: Rgb, ImageBuffer, ExtractedColor, ThemePalette, Command, Report."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple


class Rgb(NamedTuple):
    """An 8-bit sRGB triple."""

    r: int
    g: int
    b: int


class HctValues(NamedTuple):
    """Plain hue/chroma/tone numbers, as reported in extraction results."""

    h: float
    c: float
    t: float


class TonekitError(Exception):
    """Base exception for tonekit errors."""


class EmptyExtractionError(TonekitError):
    """Raised when no colors can be extracted from an image."""


class MalformedImageError(TonekitError, ValueError):
    """Raised when an RGBA buffer does not match its declared dimensions."""


@dataclass
class ImageBuffer:
    """A decoded image: flat RGBA bytes, 4 per pixel, row-major."""

    width: int
    height: int
    data: Sequence[int] | bytes | bytearray | Any


@dataclass
class ExtractionOptions:
    """Knobs for extract_colors()."""

    quality: str = 'medium'  # low | medium | high
    max_colors: int = 5
    filter: bool = True  # drop extreme tones and unsuitable candidates
    scoring_enabled: bool = True
    fix_disliked_colors: bool = False


@dataclass(frozen=True)
class ExtractedColor:
    """One palette entry produced by extraction."""

    hex: str
    rgb: Rgb
    hct: HctValues
    population: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            'hex': self.hex,
            'rgb': {'r': self.rgb.r, 'g': self.rgb.g, 'b': self.rgb.b},
            'hct': {'h': self.hct.h, 'c': self.hct.c, 't': self.hct.t},
            'population': self.population,
            'percentage': self.percentage,
        }


@dataclass
class ThemePalette:
    """Semantic roles picked from one ordered extraction result.

    Roles are independent lookups, so the same color may fill several of them.
    """

    primary: ExtractedColor
    secondary: ExtractedColor | None = None
    tertiary: ExtractedColor | None = None
    neutral: ExtractedColor | None = None
    error: ExtractedColor | None = None

    def roles(self) -> dict[str, ExtractedColor]:
        """Return the assigned roles in display order, skipping empty ones."""
        found = {}
        for name in ('primary', 'secondary', 'tertiary', 'neutral', 'error'):
            color = getattr(self, name)
            if color is not None:
                found[name] = color
        return found


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='extract', help='Extract a palette from an image')

        @command.arguments
        def arguments(parser):
            parser.add_argument('image')

        @command.run
        def run(args, report):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._arguments_fn: Callable | None = None

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the argparse configuration function."""
        self._arguments_fn = fn
        return fn

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, args: Any, report: Report) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args, report)


@dataclass
class Report:
    """Accumulates command results for text/JSON output."""

    command: str = ''
    source: str | None = None  # image path or color arguments
    sections: dict[str, Any] = field(default_factory=dict)

    def add(self, section: str, data: Any) -> None:
        """Add (or replace) a named result section."""
        self.sections[section] = data
