# ==============================================
# Eligibility Criteria Store
# ==============================================
#
# Package Structure (4 Topics + Orchestrator):
#
# eligibility_criteria/
# ├── criteria/        # Topic 1: Criterion codec and bucket editing
# ├── status/          # Topic 2: Tab -> beneficiary status resolution
# ├── storage/         # Topic 3: json_ext migration and criteria store
# ├── persistence/     # Topic 4: Benefit plan file store / MySQL repository
# ├── filters/         # Plan identifiers and custom filter metadata client
# ├── config.py        # Configuration management
# ├── errors.py        # Exception hierarchy
# ├── logging_config.py  # structlog setup
# ├── session.py       # Final orchestrator class
# └── cli.py           # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
