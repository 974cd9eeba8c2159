from saverkit.cli import main

raise SystemExit(main())
