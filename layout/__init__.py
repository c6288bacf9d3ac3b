from .config import (
    ShowerGeometry,
    SceneStyle,
    SceneConfig,
    DEFAULT_SHOWER,
    DEFAULT_SCENE_CONFIG,
)
from .scene import (
    BathtubSpec,
    InvalidBathtubSpec,
    SceneShape,
    TubPlacement,
    Scene,
    format_cm,
    place_tub,
    select_innermost,
    build_scene,
)
from .loader import (
    BathtubLoadError,
    LoadResult,
    load_bathtub,
    load_bathtubs,
    source_label,
)
from .fit import (
    FitReport,
    check_fit,
    check_scene_fits,
)
