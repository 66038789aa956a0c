from apidecl.cli import main

raise SystemExit(main())
