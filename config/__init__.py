# ==============================================================================
# CRM PUBLIC API - CONFIG PACKAGE
# ==============================================================================
