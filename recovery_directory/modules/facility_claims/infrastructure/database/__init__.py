# 📄 File: recovery_directory/modules/facility_claims/infrastructure/database/__init__.py
