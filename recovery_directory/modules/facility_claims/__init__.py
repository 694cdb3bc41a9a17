# 📄 File: recovery_directory/modules/facility_claims/__init__.py
