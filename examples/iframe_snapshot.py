#!/usr/bin/env python3
"""Snapshot a page with an iframe and resolve references in both frames."""

import asyncio
from pathlib import Path

from playwright.async_api import async_playwright

from browser_snapshot import SnapshotConfig, SnapshotSession, SnapshotTools


class PageAccessor:
    """Hands the demo page to the tool facade."""

    def __init__(self, page):
        self.page = page

    async def get_current_page(self):
        return self.page


TEST_HTML = """
<html>
<body>
    <h1>Main Frame</h1>
    <button id="main-button-1">Main Button 1</button>
    <input type="checkbox" id="agree" required> <label for="agree">Agree</label>
    <iframe srcdoc="
        <h2>Iframe Content</h2>
        <button>Iframe Button 1</button>
        <a href='#'>Iframe Link</a>"
        width="400" height="200">
    </iframe>
</body>
</html>
"""


async def main():
    config = SnapshotConfig.from_env(Path(__file__).parent / ".env", verbose=2)

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        page = await browser.new_page()
        await page.set_content(TEST_HTML)
        await page.wait_for_timeout(1000)

        async with SnapshotSession(config) as session:
            tools = SnapshotTools(PageAccessor(page), session)

            print("1. Main frame snapshot:")
            print((await tools.browser_snapshot()).text)

            print("\n2. All frames:")
            print((await tools.browser_snapshot(all_frames=True)).text)

            print("\n3. Resolving references:")
            for ref, hint in [("s1e1", None), ("f1s1e1", None), ("f1s1e1", "link"), ("f5s1e1", None)]:
                result = await tools.browser_resolve(ref, hint)
                marker = "x" if result.is_error else "-"
                print(f"   {marker} {ref} ({hint or config.default_role_hint}): {result.text}")

        await browser.close()


if __name__ == "__main__":
    asyncio.run(main())
