from typing import Final

######################################
# Sync statistics settings:
SHORT_SYNC_STAT_DELAY_SEC: Final[float] = 30.0
LONG_SYNC_STAT_DELAY_SEC: Final[float] = 300.0

# Number of slots before the node tip where the chain-index is considered to be synced.
SYNCED_SLOT_GAP: Final[int] = 100

_MAJOR_VER = 1
_MINOR_VER = 0
_BUILD_VER = 0
_REVISION = "CHAIN_INDEX_REVISION_TO_BE_REPLACED"
CHAIN_INDEX_VER = f"v{_MAJOR_VER}.{_MINOR_VER}.{_BUILD_VER}-{_REVISION}"
