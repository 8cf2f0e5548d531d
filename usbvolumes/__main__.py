"""Allow running usbvolumes as ``python -m usbvolumes``."""

from usbvolumes.cli import main


if __name__ == "__main__":
    main()
