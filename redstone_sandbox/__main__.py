"""Allow ``python -m redstone_sandbox``."""

from redstone_sandbox.experiments.run import main

if __name__ == "__main__":
    main()
