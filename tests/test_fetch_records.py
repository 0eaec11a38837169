import io
import unittest
from contextlib import redirect_stdout

from channel_audit.loader import load_bundle
from tools.youtube_fetch_channel_data import (
    YouTubeChannelFetcher,
    build_raw_data,
    channel_from_item,
    video_from_item,
)

CHANNEL_ITEM = {
    "id": "UC123",
    "snippet": {
        "title": "Bench Notes",
        "description": "Woodworking every week",
        "customUrl": "@benchnotes",
        "publishedAt": "2018-03-04T05:06:07Z",
        "thumbnails": {"high": {"url": "h"}},
    },
    "statistics": {"subscriberCount": "1200", "videoCount": "40", "viewCount": "99000"},
    "contentDetails": {"relatedPlaylists": {"uploads": "UU123"}},
    "brandingSettings": {
        "channel": {"country": "CA"},
        "image": {"bannerExternalUrl": "https://img/banner"},
    },
}

VIDEO_ITEM = {
    "id": "vid1",
    "snippet": {
        "title": "Dovetail Joints by Hand",
        "description": "0:00 Intro",
        "publishedAt": "2025-02-01T12:00:00Z",
        "channelId": "UC123",
        "tags": ["dovetail"],
        "categoryId": "26",
        "thumbnails": {"default": {"url": "d"}},
    },
    "statistics": {"viewCount": "300", "likeCount": "12"},
    "contentDetails": {"duration": "PT14M2S"},
}


class _Request:
    def __init__(self, response):
        self.response = response

    def execute(self):
        return self.response


class _Playlists:
    PAGES = {
        None: {"items": [{"id": "PL1", "snippet": {"title": "Joinery"}, "contentDetails": {"itemCount": 6}}],
               "nextPageToken": "p2"},
        "p2": {"items": [{"id": "PL2", "snippet": {"title": "Finishing"}, "contentDetails": {"itemCount": 2}}]},
    }

    def list(self, maxResults=None, pageToken=None, **params):
        return _Request(self.PAGES[pageToken])


class _Client:
    def playlists(self):
        return _Playlists()


class RecordBuilderTests(unittest.TestCase):
    def test_channel_from_item(self):
        channel = channel_from_item(CHANNEL_ITEM)
        self.assertEqual(channel["title"], "Bench Notes")
        self.assertEqual(channel["subscriberCount"], 1200)
        self.assertEqual(channel["uploadsPlaylistId"], "UU123")
        self.assertEqual(channel["bannerUrl"], "https://img/banner")
        self.assertEqual(channel["country"], "CA")

    def test_video_from_item_defaults_missing_counts(self):
        video = video_from_item(VIDEO_ITEM)
        self.assertEqual(video["duration"], "PT14M2S")
        self.assertEqual(video["statistics"], {"viewCount": 300, "likeCount": 12, "commentCount": 0})

    def test_raw_data_loads_as_bundle(self):
        raw_data = build_raw_data(channel_from_item(CHANNEL_ITEM), [video_from_item(VIDEO_ITEM)], [], quota_used=3)
        self.assertEqual(raw_data["transcripts"], {})
        self.assertEqual(raw_data["metadata"]["quotaUsed"], 3)

        bundle = load_bundle(raw_data)
        self.assertEqual(bundle.channel.custom_url, "@benchnotes")
        self.assertEqual(bundle.videos[0].iso_duration, "PT14M2S")


class FetcherTests(unittest.TestCase):
    def test_channel_id_urls_need_no_lookup(self):
        fetcher = YouTubeChannelFetcher("unused", client=_Client())
        self.assertEqual(fetcher.extract_channel_id("https://youtube.com/channel/UCabc_123/"), "UCabc_123")
        self.assertEqual(fetcher.quota_used, 0)

    def test_invalid_url(self):
        fetcher = YouTubeChannelFetcher("unused", client=_Client())
        with self.assertRaises(ValueError):
            fetcher.extract_channel_id("https://example.com/channel")

    def test_playlists_follow_page_tokens(self):
        fetcher = YouTubeChannelFetcher("unused", client=_Client())
        with redirect_stdout(io.StringIO()):
            playlists = fetcher.fetch_playlists("UC123")
        self.assertEqual([p["id"] for p in playlists], ["PL1", "PL2"])
        self.assertEqual(playlists[0]["itemCount"], 6)
        self.assertEqual(fetcher.quota_used, 2)


if __name__ == "__main__":
    unittest.main()
