# 📄 File: recovery_directory/modules/facility_claims/presentation/api/__init__.py
