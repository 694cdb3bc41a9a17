# 📄 File: recovery_directory/modules/facility_directory/presentation/api/v1/__init__.py
