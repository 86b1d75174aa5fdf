"""
Application Layer - client-side state.

Contains:
- session: SessionContext and SessionManager
- stores: generic CollectionStore and its article/comment instantiations
"""
