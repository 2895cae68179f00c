from whatsnext import config
from whatsnext.discovery import build_discover_query, discover
from whatsnext.recommendations import get_aggregated_recommendations
from whatsnext.tmdb import TMDbClient
import json
import sys

# Fight Club, Breaking Bad
SELECTIONS = [
    {'id': 550, 'type': 'movie'},
    {'id': 1396, 'type': 'tv'},
]

if not config.check_api_key():
    print("❌ TMDB_API_KEY missing (see .env.example)")
    sys.exit(1)

client = TMDbClient()

print("=" * 60)
print("DISCOVERY: anime + dark")
print("=" * 60)

filters = {'type': 'anime', 'mood': 'dark'}
endpoint, params = build_discover_query(filters)
print(f"\nEndpoint: /discover/{endpoint}")
print(f"Params: {json.dumps(params, indent=2)}")

try:
    page = discover(client, filters, page=1, limit=10)
    print(f"\n✓ {page['total_results']} titles in pool, page {page['page']}/{page['total_pages']}")
    for item in page['results']:
        print(f"  - {item.get('name') or item.get('title')} ({item.get('vote_average')})")
except Exception as e:
    print(f"❌ Error: {e}")

print("\n" + "=" * 60)
print("RECOMMENDATIONS")
print("=" * 60)

try:
    page = get_aggregated_recommendations(client, SELECTIONS, page=1, limit=10)
    print(f"\n✓ {page['total_results']} recommendations")
    for item in page['results']:
        title = item.get('title') or item.get('name')
        print(f"  - [{item['media_type']}] {title}  score={item['score']}  popularity={item.get('popularity')}")
except Exception as e:
    print(f"❌ Error: {e}")
    import traceback
    traceback.print_exc()
