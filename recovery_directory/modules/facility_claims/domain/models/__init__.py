# 📄 File: recovery_directory/modules/facility_claims/domain/models/__init__.py
