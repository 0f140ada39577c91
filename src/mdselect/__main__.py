"""Allow ``python -m mdselect``."""

from .app import main

raise SystemExit(main())
