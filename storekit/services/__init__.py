"""
Service layer for the demonstration programs.

Services own their stores, run a fixed sequence of store operations and
route every failure through a ReportSink. They are the only layer that
recovers from store errors.
"""
