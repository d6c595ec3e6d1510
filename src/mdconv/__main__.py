from mdconv.cli.convert import main

raise SystemExit(main())
