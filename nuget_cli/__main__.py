"""console script entrypoint for the NuGet plugin CLI."""

from .main import main as _main


def main() -> int:
    """Console entrypoint used by setuptools script hooks."""
    return _main()


if __name__ == "__main__":
    raise SystemExit(main())
