# ==============================================
# PERSISTENCE (snapshots across runs)
# ==============================================
#
# This package saves and loads parsed documents so a config can
# be compared with an earlier version of itself.
#
# Modules:
# --------
# - snapshot_store.py  → Save/load ConfigDocument as JSON
#
# ==============================================

from .snapshot_store import SnapshotStore

__all__ = ["SnapshotStore"]
