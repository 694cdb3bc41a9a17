# 📄 File: recovery_directory/modules/facility_directory/domain/services/__init__.py
