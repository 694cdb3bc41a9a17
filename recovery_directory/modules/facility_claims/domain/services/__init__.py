# 📄 File: recovery_directory/modules/facility_claims/domain/services/__init__.py
