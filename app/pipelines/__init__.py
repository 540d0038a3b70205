"""
Insurance intake pipelines.

Business logic orchestration functions.
"""
