"""Example: Synthesize speech with the gemini_proxy library and save it as WAV."""

import asyncio
import base64
import json
import os
import wave

from gemini_proxy import ProxyConfig, generate_audio


async def main():
    """Synthesize a sentence and write it to speech.wav."""
    config = ProxyConfig(
        api_key=os.environ.get("GEMINI_API_KEY"),
        tts_voice="Kore",
    )

    event = {"body": json.dumps({"text": "Say cheerfully: Have a wonderful day!"})}

    print("Generating speech...")
    response = await generate_audio(event, config)

    body = json.loads(response["body"])
    if response["statusCode"] != 200:
        print(f"Error {response['statusCode']}: {body['error']['message']}")
        return

    # The API returns raw 16-bit mono PCM at 24kHz
    inline_data = body["candidates"][0]["content"]["parts"][0]["inlineData"]
    pcm = base64.b64decode(inline_data["data"])

    with wave.open("speech.wav", "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(24000)
        wav.writeframes(pcm)

    print(f"\nSaved speech.wav ({len(pcm)} bytes of audio, {inline_data.get('mimeType')})")


if __name__ == "__main__":
    asyncio.run(main())
