# inplace/core/__init__.py
"""
Core of the plugin: file filtering, engines, the render dispatcher and the
build orchestration.
"""
