# 📄 File: recovery_directory/modules/facility_directory/presentation/api/__init__.py
