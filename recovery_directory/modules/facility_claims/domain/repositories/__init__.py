# 📄 File: recovery_directory/modules/facility_claims/domain/repositories/__init__.py
