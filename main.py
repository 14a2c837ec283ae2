import sys
from dotenv import load_dotenv

from src.pipeline import handler

# Load env
load_dotenv()

def main():
    result = handler()
    print(f"\n--- Sync Finished ({result.status_code}: {result.body}) ---")
    sys.exit(0 if result.ok else 1)

if __name__ == "__main__":
    main()
