# growth_models/cli/__init__.py
