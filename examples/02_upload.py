"""
Upload files and directories
"""
import asyncio
from cloudinpy import CloudinaryClient, ResourceType


async def main():
    async with CloudinaryClient.from_env() as cloud:
        
        # Public id is the parent directory plus the name: images/photo
        url = await cloud.upload_image("images/photo.jpg")
        print(f"Uploaded: {url}")
        
        # Raw files keep their extension: assets/css/default.css
        url = await cloud.upload_raw("css/default.css", prepend="assets/")
        print(f"Uploaded: {url}")
        
        # In-memory content
        result = await cloud.upload_file("notes/readme.txt", b"hello", resource_type=ResourceType.RAW)
        print(f"Uploaded {result.public_id} ({result.bytes} bytes)")
        
        # Whole directory, public ids relative to it
        cloud.settings.max_concurrent_uploads = 4
        for result in await cloud.upload_tree("static", prepend="site/", resource_type=ResourceType.RAW):
            print(f"  {result.public_id}: {result.url}")


if __name__ == "__main__":
    asyncio.run(main())
