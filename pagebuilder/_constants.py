"""Common literal values used across pagebuilder.

These constants keep the document version, history bounds, and absolute-block seed
values centralized so the editor store, persistence adapter, and tests can
import the same values without drifting. Intended for internal use within the
pagebuilder package.

Examples
--------
>>> from pagebuilder import _constants
>>> _constants.HISTORY_LIMIT
50
>>> _constants.ABSOLUTE_BLOCK_DEFAULTS["positionMode"]
'absolute'
"""

DOCUMENT_VERSION = 2

HISTORY_LIMIT = 50
COALESCE_WINDOW_SECONDS = 0.4

POSITION_FLOW = "flow"
POSITION_ABSOLUTE = "absolute"

ABSOLUTE_BLOCK_DEFAULTS: dict[str, object] = {
    "positionMode": POSITION_ABSOLUTE,
    "positionX": 24,
    "positionY": 24,
    "zIndex": 20,
    "scale": 100,
}

ID_LENGTH = 10
