"""Data models and constants for the Tile Poster compositor."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tileposter.errors import ParameterOutOfRange

# AIDEV-NOTE: Poster canvas dimensions - exported files use the same size
PREVIEW_WIDTH = 1200  # px
PREVIEW_HEIGHT = 628  # px

BACKGROUND_COLOR = (246, 242, 223)  # #f6f2df

# Default tile palette (the last entry is the background, an "empty" tile)
DEFAULT_PALETTE = (
    (239, 63, 53),  # red
    (50, 151, 88),  # green
    (51, 86, 163),  # blue
    (250, 226, 94),  # yellow
    BACKGROUND_COLOR,
)

# Viewport behavior
ZOOM_STEP = 0.05  # scale change per wheel notch
MIN_SCALE_FACTOR = 0.5  # relative to the fit-to-width scale
MAX_SCALE_FACTOR = 3.0

# Filter and tile constants
SATURATION_REDUCTION = 0.5  # fraction removed when grayscale is off
CIRCLE_DIAMETER_RATIO = 0.9  # circle diameter relative to tile size
CLUSTER_BONUS = 0.2  # added probability next to a placed tile

EXPORT_FILENAME_FORMAT = "output-%Y%m%d-%H%M%S.png"

# Configuration file path
CONFIG_FILE = Path.home() / ".tileposter_config.json"


def _check_rgb(name: str, color: "tuple[int, int, int]"):
    if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
        raise ParameterOutOfRange(f"{name} must be an RGB triple in 0-255, got {color!r}")


class TileShape(Enum):
    """Shape drawn for each placed tile."""

    SQUARE = "square"
    CIRCLE = "circle"


@dataclass(frozen=True)
class FilterParameters:
    """Settings for the stylized filter chain.

    AIDEV-NOTE: Immutable on purpose. The UI builds a new instance on every
    edit and the processor compares it against the cached one.
    """

    grayscale_enabled: bool = True
    contrast_factor: float = 1.3  # 1.0 = unchanged
    grain_amplitude: float = 15.0  # max per-channel noise magnitude
    tint_color: "tuple[int, int, int]" = BACKGROUND_COLOR  # multiply color

    def __post_init__(self):
        if self.contrast_factor <= 0:
            raise ParameterOutOfRange(
                f"contrast_factor must be > 0, got {self.contrast_factor}"
            )
        if self.grain_amplitude < 0:
            raise ParameterOutOfRange(
                f"grain_amplitude must be >= 0, got {self.grain_amplitude}"
            )
        _check_rgb("tint_color", self.tint_color)
        object.__setattr__(self, "tint_color", tuple(int(c) for c in self.tint_color))


@dataclass(frozen=True)
class TileGridParameters:
    """Settings for the decorative tile overlay."""

    tile_size: int = 100  # px per grid cell
    density: float = 0.1  # placement probability (0-1)
    variation_percent: int = 0  # max size jitter, % of tile size
    clustering_enabled: bool = False
    shape: TileShape = TileShape.SQUARE
    palette: "tuple[tuple[int, int, int], ...]" = DEFAULT_PALETTE

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ParameterOutOfRange(f"tile_size must be > 0, got {self.tile_size}")
        if not 0.0 <= self.density <= 1.0:
            raise ParameterOutOfRange(f"density must be in [0, 1], got {self.density}")
        if self.variation_percent < 0:
            raise ParameterOutOfRange(
                f"variation_percent must be >= 0, got {self.variation_percent}"
            )
        if not self.palette:
            raise ParameterOutOfRange("palette must contain at least one color")
        for color in self.palette:
            _check_rgb("palette color", color)
        object.__setattr__(
            self, "palette", tuple(tuple(int(c) for c in color) for color in self.palette)
        )


# --- Tile Overlay Models ---


@dataclass(frozen=True)
class PlacedTile:
    """A single shape placed on the tile grid.

    Size is the square side or the circle diameter in pixels. The center is
    in canvas coordinates.
    """

    grid_x: int
    grid_y: int
    size: float
    color: "tuple[int, int, int]"
    shape: TileShape
    center_x: float
    center_y: float


@dataclass(frozen=True)
class TileOverlay:
    """All tiles placed for one generation pass, in row-major order."""

    width: int
    height: int
    tile_size: int
    offset_y: float  # vertical grid offset that centers the grid
    tiles: "tuple[PlacedTile, ...]" = ()

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)


# --- Viewport Models ---


@dataclass(frozen=True)
class ViewportState:
    """Position and zoom of the source image on the canvas.

    AIDEV-NOTE: min_scale <= scale <= max_scale always holds. Once placed,
    the controller stops accepting drags and zooms.
    """

    scale: float
    min_scale: float
    max_scale: float
    origin_x: float
    origin_y: float
    image_width: int
    image_height: int
    placed: bool = False

    @property
    def scaled_width(self) -> float:
        return self.image_width * self.scale

    @property
    def scaled_height(self) -> float:
        return self.image_height * self.scale


# --- Persisted Settings ---


@dataclass
class PosterConfig:
    """User defaults persisted between sessions."""

    filter_params: FilterParameters = field(default_factory=FilterParameters)
    tile_params: TileGridParameters = field(default_factory=TileGridParameters)
    export_dir: str = "."
    seed: "int | None" = None  # None = fresh randomness every launch
