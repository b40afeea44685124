"""
Rename and delete resources
"""
import asyncio
from cloudinpy import CloudinaryClient, ClientSettings


async def main():
    settings = ClientSettings(verbose=True)
    async with CloudinaryClient.from_env(settings=settings) as cloud:
        
        await cloud.rename("images/photo", "images/cover")
        print("Renamed images/photo -> images/cover")
        
        # Never delete anything under protected/
        cloud.keep_files("^protected/")
        print(await cloud.delete("protected/logo"))  # keep
        print(await cloud.delete("images/cover"))    # ok
        
        # Dry run: nothing is sent
        cloud.set_simulate(True)
        print(await cloud.delete("images/other"))


if __name__ == "__main__":
    asyncio.run(main())
