"""Entry point delegating to the glue pipeline CLI."""

from glideopt.glue.pipeline import main as pipeline_main


def main() -> None:
    pipeline_main()


if __name__ == "__main__":
    main()
