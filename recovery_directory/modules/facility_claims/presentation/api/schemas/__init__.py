# 📄 File: recovery_directory/modules/facility_claims/presentation/api/schemas/__init__.py
