"""Example: Generate text with the gemini_proxy library."""

import asyncio
import json
import os

from gemini_proxy import ProxyConfig, generate_text


async def main():
    """Send a prompt with a system instruction."""
    config = ProxyConfig(api_key=os.environ.get("GEMINI_API_KEY"))

    event = {
        "body": json.dumps(
            {
                "prompt": "What is the capital of France?",
                "systemInstruction": "Answer in one short sentence.",
            }
        )
    }

    print("Sending prompt...")
    response = await generate_text(event, config)

    body = json.loads(response["body"])
    if response["statusCode"] != 200:
        print(f"Error {response['statusCode']}: {body['error']['message']}")
        return

    text = body["candidates"][0]["content"]["parts"][0]["text"]
    print(f"\nModel: {text}")

    if "usageMetadata" in body:
        print(f"\nTokens used: {body['usageMetadata'].get('totalTokenCount', 'N/A')}")


if __name__ == "__main__":
    asyncio.run(main())
