"""Command line utility for the BaZhai 寄卦编宅 calculator.

Compute the building's 寄卦, the floor trigram and the verdict for the
unit door:

.. code-block:: bash

    python analyze_fengshui.py --door 大門置中 --base 北 --facing 南 --floor 2 --unit-door 北
    python analyze_fengshui.py --base N --facing S --floor 5 --compass stars.png
"""
from fengshui.__main__ import main

if __name__ == "__main__":
    raise SystemExit(main())
