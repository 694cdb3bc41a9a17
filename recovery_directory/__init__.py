# 📄 File: recovery_directory/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The Recovery Directory backend: a searchable listing of treatment facilities
# that owners can claim, keep up to date and promote.

__version__ = "1.0.0"
