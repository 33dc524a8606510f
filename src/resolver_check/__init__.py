from resolver_check.logger import get_logger

__author__ = """gql-resolver-check maintainers"""
__version__ = "0.1.0"

log = get_logger("resolver_check")
