from turtle_preview_core.assemble import wrap_turtle
from turtle_preview_core.config import Settings, load_settings
from turtle_preview_core.filetype import infer_script_type, mime_for_filename
from turtle_preview_core.head_scan import scan_html_top
from turtle_preview_core.meta import DEFAULT_META, DocumentMeta, LibraryScript, effective_meta, is_default_meta
from turtle_preview_core.models import PreviewDocument, ScanResult, SetupScript, TagPosition
from turtle_preview_core.preview import insert_base_href, modify_for_preview

__all__ = [
    "__version__",
    "DEFAULT_META",
    "DocumentMeta",
    "LibraryScript",
    "PreviewDocument",
    "ScanResult",
    "Settings",
    "SetupScript",
    "TagPosition",
    "effective_meta",
    "infer_script_type",
    "insert_base_href",
    "is_default_meta",
    "load_settings",
    "mime_for_filename",
    "modify_for_preview",
    "scan_html_top",
    "wrap_turtle",
]

__version__ = "0.0.0"
