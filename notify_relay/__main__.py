from notify_relay.server import main

raise SystemExit(main())
