# 📄 File: recovery_directory/modules/facility_directory/domain/repositories/__init__.py
