"""
VSL Player Service

Configuration, retention curve and embed-code generation for video sales
letter players, plus the project store and local sessions behind the editor.
"""

from .models import (
    AspectRatio,
    PlayerConfig,
    Project,
)
from .curve import (
    DISPLAY_PERCENT_JS,
    compute_display_percent,
    progress_for_time,
    sample_curve,
)
from .markup import (
    attribute_url,
    encode_uri,
    escape_html,
    normalize_accent_color,
)
from .embed_generator import (
    EmbedGenerator,
    generate_embed_code,
    random_instance_id,
)
from .preview import PreviewPlayer
from .errors import (
    AuthenticationError,
    PersistenceError,
    ProjectNotFoundError,
    SessionExpiredError,
    VSLPlayerError,
)
from .sessions import Session, SessionRegistry
from .project_store import ProjectStore

__all__ = [
    "AspectRatio",
    "PlayerConfig",
    "Project",
    "DISPLAY_PERCENT_JS",
    "compute_display_percent",
    "progress_for_time",
    "sample_curve",
    "attribute_url",
    "encode_uri",
    "escape_html",
    "normalize_accent_color",
    "EmbedGenerator",
    "generate_embed_code",
    "random_instance_id",
    "PreviewPlayer",
    "AuthenticationError",
    "PersistenceError",
    "ProjectNotFoundError",
    "SessionExpiredError",
    "VSLPlayerError",
    "Session",
    "SessionRegistry",
    "ProjectStore",
]
