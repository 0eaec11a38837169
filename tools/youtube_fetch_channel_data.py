#!/usr/bin/env python3
"""
YouTube Channel Data Fetcher
Fetches channel metadata, uploads and playlists from YouTube Data API v3
and writes them as a raw_data.json bundle for the channel audit.

Usage:
    python3 tools/youtube_fetch_channel_data.py "https://youtube.com/@channelname"
"""

import json
import os
import re
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

load_dotenv()

SUPPORTED_URL_FORMATS = (
    "https://youtube.com/@username",
    "https://youtube.com/channel/UCxxxxxxxx",
    "https://youtube.com/c/channelname",
    "https://youtube.com/user/username",
)

PAGE_SIZE = 50


def _quota_error(e):
    if e.resp.status == 403:
        return Exception("YouTube API quota exceeded. Wait until midnight PT or use a different API key.")
    return Exception(f"YouTube API error: {e}")


class YouTubeChannelFetcher:
    def __init__(self, api_key, client=None):
        """Wrap a YouTube Data API v3 client; ``client`` lets callers inject one."""
        self.youtube = client or build('youtube', 'v3', developerKey=api_key)
        self.quota_used = 0

    def _execute(self, request, cost=1):
        response = request.execute()
        self.quota_used += cost
        return response

    def extract_channel_id(self, url):
        """Resolve any supported channel URL format to a UC... channel ID."""
        url = url.strip().rstrip('/')

        match = re.search(r'youtube\.com/channel/(UC[\w-]+)', url)
        if match:
            return match.group(1)

        match = re.search(r'youtube\.com/@([\w.-]+)', url)
        if match:
            return self.lookup_handle(match.group(1))

        match = re.search(r'youtube\.com/user/([\w-]+)', url)
        if match:
            return self.lookup_handle(match.group(1))

        match = re.search(r'youtube\.com/c/([\w-]+)', url)
        if match:
            return self.search_channel(match.group(1))

        formats = "\n".join(f"  - {fmt}" for fmt in SUPPORTED_URL_FORMATS)
        raise ValueError(f"Invalid YouTube channel URL format: {url}\nSupported formats:\n{formats}")

    def lookup_handle(self, name):
        """Try the modern handle lookup first, then the legacy username."""
        name = name.lstrip('@')
        try:
            for key in ('forHandle', 'forUsername'):
                response = self._execute(self.youtube.channels().list(part='id', **{key: name}))
                if response.get('items'):
                    return response['items'][0]['id']
        except HttpError as e:
            if e.resp.status == 404:
                raise ValueError(f"Channel not found: @{name}")
            raise
        raise ValueError(f"Channel not found: @{name}")

    def search_channel(self, query):
        try:
            response = self._execute(
                self.youtube.search().list(part='snippet', q=query, type='channel', maxResults=1),
                cost=100,
            )
        except HttpError as e:
            if e.resp.status == 404:
                raise ValueError(f"Channel not found: {query}")
            raise
        if not response.get('items'):
            raise ValueError(f"Channel not found with custom URL: {query}")
        return response['items'][0]['snippet']['channelId']

    def fetch_channel_info(self, channel_id):
        """Channel snippet, statistics, uploads playlist and branding banner."""
        try:
            response = self._execute(self.youtube.channels().list(
                part='snippet,statistics,contentDetails,brandingSettings',
                id=channel_id,
            ))
        except HttpError as e:
            if e.resp.status == 404:
                raise ValueError(f"Channel not found: {channel_id}")
            raise _quota_error(e)

        if not response.get('items'):
            raise ValueError(f"Channel not found: {channel_id}")
        return channel_from_item(response['items'][0])

    def fetch_channel_videos(self, uploads_playlist_id, max_videos=0):
        """
        Uploads with full snippet, statistics and duration.

        max_videos <= 0 keeps every upload; otherwise the top N by view count.
        """
        print("📹 Fetching videos from channel...")
        if not uploads_playlist_id:
            raise Exception("Could not find uploads playlist for this channel")

        try:
            video_ids = []
            for item in self._paginate(self.youtube.playlistItems().list, part='contentDetails', playlistId=uploads_playlist_id):
                video_ids.append(item['contentDetails']['videoId'])
            print(f"   Found {len(video_ids)} videos")

            videos = []
            for start in range(0, len(video_ids), PAGE_SIZE):
                batch = video_ids[start:start + PAGE_SIZE]
                response = self._execute(self.youtube.videos().list(
                    part='snippet,statistics,contentDetails',
                    id=','.join(batch),
                ))
                videos.extend(video_from_item(item) for item in response.get('items', []))
        except HttpError as e:
            raise _quota_error(e)

        videos.sort(key=lambda v: v['statistics']['viewCount'], reverse=True)
        if max_videos > 0:
            videos = videos[:max_videos]
            print(f"✅ Selected top {len(videos)} videos by view count")
        else:
            print(f"✅ Selected all {len(videos)} videos")
        return videos

    def fetch_playlists(self, channel_id):
        """Public playlists with their item counts."""
        print("📚 Fetching playlists...")
        try:
            playlists = [
                {
                    'id': item['id'],
                    'title': item['snippet'].get('title', ''),
                    'itemCount': int(item.get('contentDetails', {}).get('itemCount', 0)),
                }
                for item in self._paginate(self.youtube.playlists().list, part='snippet,contentDetails', channelId=channel_id)
            ]
        except HttpError as e:
            raise _quota_error(e)
        print(f"   Found {len(playlists)} playlists")
        return playlists

    def _paginate(self, method, **params):
        page_token = None
        while True:
            response = self._execute(method(maxResults=PAGE_SIZE, pageToken=page_token, **params))
            yield from response.get('items', [])
            page_token = response.get('nextPageToken')
            if not page_token:
                break

    def save_data(self, channel_info, videos, playlists, output_dir):
        """Write raw_data.json; transcripts are left empty for external tools to fill."""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        data = build_raw_data(channel_info, videos, playlists, self.quota_used)
        output_file = output_path / 'raw_data.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return str(output_file)


def channel_from_item(item):
    snippet = item.get('snippet', {})
    statistics = item.get('statistics', {})
    branding = item.get('brandingSettings', {})
    return {
        'id': item['id'],
        'title': snippet.get('title', ''),
        'description': snippet.get('description', ''),
        'customUrl': snippet.get('customUrl', ''),
        'country': snippet.get('country') or branding.get('channel', {}).get('country', ''),
        'publishedAt': snippet.get('publishedAt', ''),
        'thumbnails': snippet.get('thumbnails', {}),
        'bannerUrl': branding.get('image', {}).get('bannerExternalUrl', ''),
        'subscriberCount': int(statistics.get('subscriberCount', 0)),
        'videoCount': int(statistics.get('videoCount', 0)),
        'viewCount': int(statistics.get('viewCount', 0)),
        'uploadsPlaylistId': item.get('contentDetails', {}).get('relatedPlaylists', {}).get('uploads', ''),
    }


def video_from_item(item):
    snippet = item.get('snippet', {})
    statistics = item.get('statistics', {})
    return {
        'id': item['id'],
        'title': snippet.get('title', ''),
        'description': snippet.get('description', ''),
        'publishedAt': snippet.get('publishedAt', ''),
        'channelId': snippet.get('channelId', ''),
        'tags': snippet.get('tags', []),
        'categoryId': snippet.get('categoryId', ''),
        'thumbnails': snippet.get('thumbnails', {}),
        'duration': item.get('contentDetails', {}).get('duration', ''),
        'statistics': {
            'viewCount': int(statistics.get('viewCount', 0)),
            'likeCount': int(statistics.get('likeCount', 0)),
            'commentCount': int(statistics.get('commentCount', 0)),
        },
    }


def build_raw_data(channel_info, videos, playlists, quota_used=0):
    return {
        'channel': channel_info,
        'videos': videos,
        'playlists': playlists,
        'transcripts': {},
        'metadata': {
            'fetchedAt': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
            'videoCount': len(videos),
            'playlistCount': len(playlists),
            'quotaUsed': quota_used,
        },
    }


def fetch_channel(api_key, channel_url, max_videos, output_folder):
    """Fetch everything for one channel URL and return the raw_data.json path."""
    fetcher = YouTubeChannelFetcher(api_key)

    print("🔍 Extracting channel ID...")
    channel_id = fetcher.extract_channel_id(channel_url)
    print(f"   Channel ID: {channel_id}")
    print()

    print("📊 Fetching channel information...")
    channel_info = fetcher.fetch_channel_info(channel_id)
    print(f"   Channel: {channel_info['title']}")
    print(f"   Subscribers: {channel_info['subscriberCount']:,}")
    print(f"   Total Videos: {channel_info['videoCount']:,}")
    print(f"   Total Views: {channel_info['viewCount']:,}")
    print()

    videos = fetcher.fetch_channel_videos(channel_info['uploadsPlaylistId'], max_videos)
    playlists = fetcher.fetch_playlists(channel_id)
    print()

    output_file = fetcher.save_data(channel_info, videos, playlists, f"{output_folder}/{channel_id}")
    print(f"💰 API quota used: ~{fetcher.quota_used} units")
    return output_file


def main():
    if len(sys.argv) != 2:
        print("❌ Error: Missing channel URL")
        print("\nUsage:")
        print("  python3 tools/youtube_fetch_channel_data.py \"CHANNEL_URL\"")
        print("\nExample:")
        print("  python3 tools/youtube_fetch_channel_data.py \"https://youtube.com/@mkbhd\"")
        sys.exit(1)

    channel_url = sys.argv[1]
    api_key = os.getenv('YOUTUBE_API_KEY')
    max_videos = int(os.getenv('MAX_VIDEOS', 0))
    output_folder = os.getenv('OUTPUT_FOLDER', '.tmp/youtube_audits')

    if not api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file")
        sys.exit(1)

    try:
        print("🚀 YouTube Channel Data Fetcher")
        print("=" * 50)
        print(f"Channel URL: {channel_url}")
        print(f"Max videos: {max_videos if max_videos > 0 else 'ALL'}")
        print()

        output_file = fetch_channel(api_key, channel_url, max_videos, output_folder)

        print("=" * 50)
        print("✅ SUCCESS!")
        print(f"📁 Data saved to: {output_file}")
        print()
        print("Next step:")
        print(f"  python3 tools/youtube_analyze_videos.py {output_file}")

    except ValueError as e:
        print(f"❌ Validation Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
