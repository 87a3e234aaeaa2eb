from curvegen.cli import main

raise SystemExit(main())
