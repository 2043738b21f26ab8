"""Service layer: register operations returning ServiceResult."""
