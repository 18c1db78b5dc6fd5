from plotpng.cli import main

raise SystemExit(main())
