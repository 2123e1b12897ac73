import sys

from image_recognition.cli import main

sys.exit(main())
