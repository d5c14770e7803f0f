from mdfexport.cli import main

raise SystemExit(main())
