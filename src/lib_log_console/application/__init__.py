"""Application layer: ports, handler registry, facade and use cases.

Import from the submodules directly; this package stays import-free so the
adapters can depend on :mod:`lib_log_console.application.ports` without
pulling in the facade.
"""
