from resolver_check.schema.extraction import extract_schema

__all__ = ["extract_schema"]
