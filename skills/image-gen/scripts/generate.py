#!/usr/bin/env python3
"""Image generation script for the image-gen skill.

Thin wrapper around imagegen.generate so the skill can be invoked by path:

    python3 skills/image-gen/scripts/generate.py --prompt-file ./prompt.txt \
        --size 2K --aspect-ratio 16:9 --output ./fox.png

Requires the imagegen package: pip install -e .
"""

import sys

from imagegen.generate import main

if __name__ == "__main__":
    sys.exit(main())
