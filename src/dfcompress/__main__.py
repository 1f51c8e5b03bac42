from dfcompress.cli import main

raise SystemExit(main())
