#!/usr/bin/env python3
"""
A2A Server Container Usage Examples

Demonstrates starting the A2A reference server in Docker and talking to it
through A2AServerContainer.

Run examples:
    python examples/a2a_server_usage.py --example basic
    python examples/a2a_server_usage.py --example advanced
    python examples/a2a_server_usage.py --example all

Prerequisites:
    1. Docker running with the a2a-java-server:latest image built
       (docker build -t a2a-java-server:latest .)
    2. Python environment with a2a-testcontainers installed
"""

import argparse
import logging
from datetime import timedelta

from a2a_testcontainers import A2AContainerError, A2AServerContainer


def setup_logging():
    """Configure logging for examples."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def example_basic_usage():
    """Start, inspect, message, stop."""
    print("=" * 60)
    print("BASIC USAGE EXAMPLE")
    print("=" * 60)

    # The container stops when the with block exits, even on errors
    with A2AServerContainer() as a2a_server:
        a2a_server.wait_for_ready(timedelta(minutes=1))

        print(f"A2A Server is running at: {a2a_server.get_server_url()}")

        card = a2a_server.get_public_agent_card()
        print(f"Agent name: {card['name']}")
        print(f"Agent description: {card['description']}")

        response = a2a_server.send_message("Hi there!")
        print(f"Agent response: {response}")

        print(f"Server is healthy: {a2a_server.is_healthy()}")


def example_advanced_usage():
    """Extra environment, typed agent card and container logs."""
    print("=" * 60)
    print("ADVANCED USAGE EXAMPLE")
    print("=" * 60)

    container = A2AServerContainer().with_env("CUSTOM_SETTING", "value")

    try:
        container.start()

        card = container.get_agent_card()
        print(f"Streaming: {card.capabilities.streaming}")
        print(f"Push notifications: {card.capabilities.push_notifications}")
        for skill in card.skills:
            print(f"Skill {skill.id}: {skill.description}")

        stdout, _ = container.get_logs()
        for line in stdout.splitlines()[-5:]:
            print(f"[A2A-SERVER] {line}")
    finally:
        container.stop()


EXAMPLES = {
    "basic": example_basic_usage,
    "advanced": example_advanced_usage,
}


def main():
    parser = argparse.ArgumentParser(description="A2A server container examples")
    parser.add_argument("--example", choices=[*EXAMPLES, "all"], default="basic")
    args = parser.parse_args()

    setup_logging()

    selected = EXAMPLES.values() if args.example == "all" else [EXAMPLES[args.example]]
    try:
        for example in selected:
            example()
    except A2AContainerError as e:
        print(f"Example failed: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
