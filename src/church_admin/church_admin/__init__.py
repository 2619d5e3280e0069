"""Church administration package.

Organized by feature modules (accounting, finance, ebd, access, users,
orders), each with a thin Flask controller over service/repository layers.
"""
