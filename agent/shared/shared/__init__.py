"""Settings, schemas and service plumbing shared by the NetCores entry points."""
