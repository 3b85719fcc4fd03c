"""Canned BoardGameGeek XML API documents."""

GLOOMHAVEN_THING = """<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <item type="boardgame" id="174430">
    <thumbnail>https://cf.geekdo-images.com/sZYp_3BTDGjh2unaZfZmuA__thumb/img/pic2437871.jpg</thumbnail>
    <image>
      https://cf.geekdo-images.com/sZYp_3BTDGjh2unaZfZmuA__original/img/pic2437871.jpg
    </image>
    <name type="primary" sortindex="1" value="Gloomhaven" />
    <name type="alternate" sortindex="1" value="Мрачная Гавань" />
    <description>Gloomhaven is a game of Euro-inspired tactical combat.&#10;&#10;Players take on the role of wandering adventurers.</description>
    <yearpublished value="2017" />
    <minplayers value="1" />
    <maxplayers value="4" />
    <playingtime value="120" />
    <minplaytime value="60" />
    <maxplaytime value="120" />
    <minage value="14" />
    <statistics page="1">
      <ratings>
        <usersrated value="61000" />
        <average value="8.6" />
        <averageweight value="3.8966" />
      </ratings>
    </statistics>
  </item>
</items>
"""

SEARCH_RESULTS = """<?xml version="1.0" encoding="utf-8"?>
<items total="3" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <item type="boardgame" id="174430">
    <name type="primary" value="Gloomhaven"/>
    <yearpublished value="2017" />
  </item>
  <item type="boardgame" id="291457">
    <name type="primary" value="Gloomhaven: Jaws of the Lion"/>
  </item>
  <item type="boardgame" id="26">
    <name type="primary" value="Tzolk'in &amp; Friends"/>
  </item>
</items>
"""
