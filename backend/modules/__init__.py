"""
Feature modules for the Willerspace backend.

- auth: sign-up, sign-in and token validation
- profiles: profiles, the handle registry and the ownership gate
- content: read, listen and watch posts
- subscribers: the email subscriber list

Each module keeps its models, exceptions, Protocol interface, repository,
service and routes side by side. Modules depend on each other's
interfaces, never on concrete services.
"""
