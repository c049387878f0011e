"""Infrastructure layer — workspace graph and filesystem loading.

This layer builds on the domain layer and the filesystem.
It must never import from services, commands, or output.
The service layer bridges between workspaces and callers.
"""
