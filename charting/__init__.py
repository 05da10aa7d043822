"""Declarative chart components bound to host state.

Each built-in component names the state fields it reads and the renderer
branch it uses. `recompute` turns a snapshot of those fields into a complete
rendering-engine option dictionary; `ChartBinding` re-runs it whenever one of
the fields changes.
"""
