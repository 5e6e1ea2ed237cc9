from wordcalc.repl import main

raise SystemExit(main())
