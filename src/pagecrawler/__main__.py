from pagecrawler.cli import main

raise SystemExit(main())
