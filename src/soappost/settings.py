"""
Settings for soappost.

These settings are global and can be accessed from any module in the soappost package.

They are used by the posters to fill in defaults the caller did not pass.

The SETTINGS dict structure follows the structure of soappost submodules.

Expected usage behavior:

```python
from soappost.settings import SETTINGS

POSTER_SETTINGS = SETTINGS.http.client.poster
```

Once initialized, the settings are expected to be immutable (not enforced).
"""

SETTINGS = {
    'http': {
        'client': {
            'poster': {
                'timeout': None,            # seconds; None waits forever
                'chunk_size': 8192,
                # Order is part of the wire contract
                'headers': (
                    ("SOAPAction", ""),
                    ("Cache-Control", "no-cache"),
                    ("Content-Type", "text/xml; charset=utf-8"),
                ),
                'encoding': "utf-8",
                'verbosity_env': "SOAPPOST_VERBOSE",
            },
        },
    },
}


class AttrDict(dict):
    """
    Settings mapping with dot access; nested dicts become AttrDicts too,
    so `SETTINGS.http.client.poster.timeout` reads like a path.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for key, value in self.items():
            if isinstance(value, dict):
                super().__setitem__(key, AttrDict(value))

    def __setitem__(self, key, value):
        if isinstance(value, dict) and not isinstance(value, AttrDict):
            value = AttrDict(value)
        super().__setitem__(key, value)

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as exc:
            raise AttributeError(f"no such setting: {key!r}") from exc


SETTINGS = AttrDict(SETTINGS)
POSTER_SETTINGS = SETTINGS.http.client.poster
