# 📄 File: recovery_directory/modules/facility_claims/domain/__init__.py
