"""
Google Cloud Functions deployment of the function adapter.
"""
