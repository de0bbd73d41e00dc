"""Allow `python -m spaserver`."""

from spaserver.main import main

raise SystemExit(main())
