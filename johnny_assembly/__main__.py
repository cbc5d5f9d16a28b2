import sys

from johnny_assembly.jasm import main

sys.exit(main())
