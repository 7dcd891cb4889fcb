from git_ingest.cli import main

raise SystemExit(main())
