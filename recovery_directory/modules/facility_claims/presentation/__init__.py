# 📄 File: recovery_directory/modules/facility_claims/presentation/__init__.py
