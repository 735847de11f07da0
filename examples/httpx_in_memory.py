#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "cachet",
# ]
#
# [tool.uv.sources]
# cachet = { path = "../", editable = true }
# ///

import datetime

import cachet

cl = cachet.CacheClient(strategy=cachet.AggressiveStrategy(lifetime=datetime.timedelta(minutes=5)))

cl.get("https://www.example.com/")
response = cl.get("https://www.example.com/")
print(response.extensions)
