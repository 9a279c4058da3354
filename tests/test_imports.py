import importlib

MODULES = [
    'doccrawl.cli',
    'doccrawl.container',
    'doccrawl.api.server',
    'doccrawl.services.crawler',
    'doccrawl.services.renderer',
    'doccrawl.services.settings_loader',
]

def test_imports():
    for m in MODULES:
        importlib.import_module(m)
