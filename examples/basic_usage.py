"""Basic usage examples for the vibestatus components."""

import os
import random

from vibestatus import (
    CompletionClient,
    Failure,
    PromptComposer,
    StatusFormatter,
    Success,
    WeatherClient,
)


def main() -> None:
    with WeatherClient() as weather:
        print("=== Current weather ===")
        result = weather.fetch_current_conditions(39.739, -75.539, "America/New_York")
        match result:
            case Success(value=reading):
                print(f"  {reading.summary_line()}")
                grounding = reading
            case Failure(error=err):
                print(f"  unavailable: {err}")
                grounding = None

    rng = random.Random()
    prompt = PromptComposer(rng).compose_prompt(grounding)
    print(f"\n=== Prompt ({prompt.theme_key.value}, seed {prompt.seed_word!r}) ===")
    print(prompt.user_prompt)

    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        print("\nOPENAI_API_KEY not set; skipping the completion call.")
        return

    with CompletionClient(api_key, rng=rng) as llm:
        match llm.complete(prompt):
            case Success(value=completion):
                print("\n=== Status ===")
                print(f"  {StatusFormatter(rng).format(completion.raw_text)}")
            case Failure(error=err):
                print(f"\nCompletion failed: {err}")


if __name__ == "__main__":
    main()
