"""Allow ``python -m llm_model_config``."""

from llm_model_config.cli.cli import main

if __name__ == "__main__":
    main()
