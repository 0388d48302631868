# ==============================================
# HAProxy Section Extractor
# ==============================================
#
# Package Structure:
#
# haproxy_sections/
# ├── classification/   # Sort raw lines into sections
# ├── storage/          # Immutable parse result + name queries + diff
# ├── persistence/      # JSON snapshots of parsed configs
# ├── sources.py        # Files / URLs → lazy line iterators
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── parser.py         # ConfigParser orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
