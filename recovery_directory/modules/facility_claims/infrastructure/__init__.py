# 📄 File: recovery_directory/modules/facility_claims/infrastructure/__init__.py
