# fetch_data.py
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Optional

import requests

from config import (
    CASES_PATH,
    CASES_URL,
    DOWNLOAD_ATTEMPTS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_DELAY_SECONDS,
    TOPOLOGY_PATH,
    TOPOLOGY_URL,
)

DOWNLOADS = {
    TOPOLOGY_PATH: TOPOLOGY_URL,
    CASES_PATH: CASES_URL,
}


def download_file(url: str, output_path: str, attempts: int = DOWNLOAD_ATTEMPTS, delay: int = RETRY_DELAY_SECONDS) -> bool:
    """
    Downloads one data file with retries.
    Returns True once the file is written, False after the last failed attempt.
    """
    print(f"  - Downloading {url}...")
    for attempt in range(attempts):
        try:
            response = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
            directory = os.path.dirname(output_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(output_path, "wb") as f:
                f.write(response.content)
            print(f"  - Saved {output_path} ({len(response.content)} bytes).")
            return True
        except requests.RequestException as e:
            print(f"  - ATTEMPT {attempt + 1} FAILED for {url}: {e}")
            if attempt < attempts - 1:  # Don't sleep on the last attempt
                print(f"  - Retrying in {delay} seconds...")
                time.sleep(delay)

    print(f"  - ERROR: Download of {url} failed after {attempts} attempts.")
    return False


def main(downloads: Optional[Dict[str, str]] = None) -> int:
    """
    Downloads the topology and the case table side by side so the app can
    run from local copies. Returns the process exit status.
    """
    downloads = downloads or DOWNLOADS
    print("--- Starting Data Download ---")

    with ThreadPoolExecutor(max_workers=len(downloads)) as executor:
        futures = {executor.submit(download_file, url, path): path for path, url in downloads.items()}
        results = [future.result() for future in as_completed(futures)]

    if not all(results):
        print("--- FATAL: At least one data file could not be downloaded. ---")
        return 1

    print("--- Data Download Complete ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
