def sort_by_english_name(entries):
    return sorted(entries or [], key=lambda entry: (entry.get('english_name') or '').lower())


def get_languages(client):
    return sort_by_english_name(client.get_languages())


def get_countries(client):
    return sort_by_english_name(client.get_countries())
