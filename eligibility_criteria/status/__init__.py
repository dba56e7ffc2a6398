# ==============================================
# TOPIC 2: STATUS
# ==============================================
#
# Modules:
# --------
# - status_resolver.py → tab id -> beneficiary status, label keys
#
# ==============================================

from .status_resolver import StatusResolver

__all__ = ["StatusResolver"]
