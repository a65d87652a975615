"""Example 1: Assembling Request Pipelines

Walks through the ways a RequestPipeline can be put together:
default construction, the built pipeline, and swapping transformers.

The default pipeline never touches the network. The built pipelines
GET https://jsfiddle.net/echo/json (override with REQPIPE_BASE_URL).
"""

import asyncio
import logging

from reqpipe import Decoder, Decrypter, Logger, RequestPipeline


async def main():
    """Run the pipeline examples."""
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    print("=" * 60)
    print("reqpipe — Example 1: Assembling Request Pipelines")
    print("=" * 60)
    print()

    # Collaborators on their own
    print("Transformers and logger:")
    print(f"  Decrypter().transform(333)  -> {Decrypter().transform(333)}")
    print(f"  Decrypter.call(333)         -> {Decrypter.call(333)}")
    print(f"  Decoder().transform(555)    -> {Decoder().transform(555)}")
    print(f"  Decoder.call(555)           -> {Decoder.call(555)}")
    Logger().log("hej")   # discarded
    Logger.call("hej")    # written at WARNING
    print()

    # Zero configuration: no I/O, no logging
    print("Default pipeline:")
    print(f"  {await RequestPipeline().get('/echo/json')!r}")
    print()

    print("Built pipeline:")
    print(f"  {await RequestPipeline.call('/echo/json')!r}")
    print()

    decode_getter = RequestPipeline.build()
    Decoder.configure(decode_getter)
    print("Decoding pipeline:")
    print(f"  {await decode_getter.get('/echo/json')!r}")
    print()

    decrypt_getter = RequestPipeline.build()
    Decrypter.configure(decrypt_getter)
    print("Decrypting pipeline:")
    print(f"  {await decrypt_getter.get('/echo/json')!r}")


if __name__ == "__main__":
    asyncio.run(main())
