"""
Ennio - Sequential workflow execution engine

Runs a named, ordered list of actions against a shared run context:
- Typed, serializable action outputs
- Cross-action variable references (<action>.<field>)
- Run-to-completion execution: failures are recorded, never fatal
- YAML workflow files validated against a JSON schema
"""

__version__ = "0.1.0"
__package_name__ = "ennio"
