"""Bounded contexts of the rehydration core.

- shared: kernel types and environment contracts
- identity: structural identities and the session table
- interception: observing event registrations
- script_context: execution context classification of scripts
- rehydration: bootstrap script generation at serialization time
- session: lifecycle of one document render
"""
