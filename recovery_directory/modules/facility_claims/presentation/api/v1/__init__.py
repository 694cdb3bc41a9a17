# 📄 File: recovery_directory/modules/facility_claims/presentation/api/v1/__init__.py
