"""
Compiler passes for dynamic components.

- detector: pattern detection from presence/size facts
- structure: markup skeleton generation
- payload: configuration payload serialization
- script: runtime script generation
- minify: tokenizing JavaScript minifier
- semantics: Python-side filter/condition/rule semantics
- render: runs the passes and assembles the container
- builder, convenience: fluent and one-call component constructors
- templating, errors, manifest: Jinja2 environment, exceptions, dynui.toml
"""
