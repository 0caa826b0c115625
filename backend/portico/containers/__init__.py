"""Containers — one subpackage per registered container.

Layout of a container:
    <name>/routes/api/<file>.py      register_routes(group) for API groups
    <name>/routes/web/<file>.py      register_routes(group) for web groups
    <name>/controllers/api/...       endpoints referenced as "module:function"
    <name>/controllers/web/...
"""
