import sys

from .generate_docs import main

sys.exit(main())
