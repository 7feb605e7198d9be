from ._helpers import InMemoryObjectStore, make_example_raw_s3_log_line

__all__ = ["InMemoryObjectStore", "make_example_raw_s3_log_line"]
