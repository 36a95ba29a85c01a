"""Stylesheet embedded in every rendered document."""

FONT_STACK = '"gg sans", "Noto Sans", "Helvetica Neue", Helvetica, Arial, sans-serif'
CODE_FONT_STACK = 'Consolas, "Andale Mono WT", "Andale Mono", "Lucida Console", monospace'

STYLESHEET = f"""
body {{
  margin: 0;
  max-width: 700px;
  background-color: #313338;
}}

.discord-message {{
  font-family: {FONT_STACK};
  background-color: #313338;
  color: #dbdee1;
  padding: 16px;
  border-radius: 8px;
  max-width: 600px;
}}

.discord-message .message-container {{
  display: flex;
  align-items: flex-start;
}}

.discord-message .avatar {{
  width: 40px;
  height: 40px;
  border-radius: 50%;
  margin-right: 12px;
  margin-top: 4px;
  flex-shrink: 0;
}}

.discord-message.has-reply .avatar {{
  margin-top: 0;
}}

.discord-message .content-wrapper {{
  flex: 1;
  min-width: 0;
}}

.discord-message .header {{
  display: flex;
  align-items: center;
  margin-bottom: 2px;
}}

.discord-message .username {{
  font-weight: 500;
  margin-right: 4px;
}}

.discord-message .role-icon {{
  width: 20px;
  height: 20px;
  margin-right: 4px;
}}

.discord-message .timestamp {{
  font-size: 12px;
  color: #949ba4;
  margin-left: 4px;
}}

.discord-message .content {{
  font-size: 16px;
  line-height: 1.375;
  white-space: pre-wrap;
  word-wrap: break-word;
}}

/* Reply preview */
.reply {{
  display: flex;
  align-items: center;
  position: relative;
  margin: 0 0 4px 56px;
  font-size: 14px;
  line-height: 1.125;
  color: #b5bac1;
  white-space: nowrap;
  overflow: hidden;
}}

.reply::before {{
  content: "";
  position: absolute;
  left: -36px;
  top: 50%;
  width: 33px;
  height: 12px;
  border-left: 2px solid #4e5058;
  border-top: 2px solid #4e5058;
  border-top-left-radius: 6px;
}}

.reply .reply-avatar {{
  width: 16px;
  height: 16px;
  border-radius: 50%;
  margin-right: 4px;
}}

.reply .reply-username {{
  font-weight: 500;
  margin-right: 4px;
}}

.reply .reply-content {{
  overflow: hidden;
  text-overflow: ellipsis;
}}

.reply .reply-content h1,
.reply .reply-content h2,
.reply .reply-content h3,
.reply .reply-content pre {{
  display: inline;
  font-size: inherit;
  margin: 0;
  padding: 0;
  border: none;
}}

.reply .reply-timestamp {{
  font-size: 11px;
  color: #949ba4;
  margin-left: 6px;
}}

/* Rich text */
.content h1, .content h2, .content h3 {{
  color: #f2f3f5;
  font-weight: 700;
  line-height: 1.375;
  margin: 8px 0 0;
}}

.content h1 {{ font-size: 24px; }}
.content h2 {{ font-size: 20px; }}
.content h3 {{ font-size: 16px; }}

.subtext {{
  font-size: 12px;
  color: #949ba4;
}}

.link {{
  color: #00a8fc;
  text-decoration: none;
}}

.mention {{
  background-color: rgba(88, 101, 242, 0.3);
  color: #c9cdfb;
  border-radius: 3px;
  padding: 0 2px;
  font-weight: 500;
}}

.inline-code {{
  font-family: {CODE_FONT_STACK};
  font-size: 85%;
  background-color: #2b2d31;
  border: 1px solid #1e1f22;
  border-radius: 4px;
  padding: 0 2px;
}}

.code-block {{
  font-family: {CODE_FONT_STACK};
  font-size: 14px;
  background-color: #2b2d31;
  border: 1px solid #1e1f22;
  border-radius: 4px;
  padding: 8px;
  margin: 6px 0 0;
  white-space: pre-wrap;
  color: #dbdee1;
}}

.emoji {{
  width: 22px;
  height: 22px;
  vertical-align: bottom;
  object-fit: contain;
}}

.emoji.emoji-jumbo {{
  width: 48px;
  height: 48px;
  min-height: 48px;
}}

.emoji.emoji-small {{
  width: 16px;
  height: 16px;
}}

.inline-media {{
  display: block;
  max-width: 400px;
  max-height: 300px;
  border-radius: 8px;
  margin-top: 4px;
}}

/* Attachment grid */
.attachment-grid {{
  display: flex;
  gap: 4px;
  max-width: 550px;
  margin-top: 8px;
  border-radius: 8px;
  overflow: hidden;
}}

.attachment-grid.grid-rows {{
  flex-direction: column;
}}

.attachment-grid.grid-columns {{
  flex-direction: row;
  height: 350px;
}}

.grid-row {{
  display: flex;
  gap: 4px;
  height: 180px;
}}

.grid-column {{
  display: flex;
  flex-direction: column;
  gap: 4px;
  flex: 1;
}}

.grid-single .grid-row {{ height: auto; max-height: 350px; }}
.grid-pair .grid-row {{ height: 275px; }}
.grid-feature .grid-column:first-child {{ flex: 2; }}
.grid-row.size-1 {{ height: 275px; }}
.grid-row.size-3 {{ height: 180px; }}

.tile {{
  flex: 1;
  min-width: 0;
  position: relative;
  background-color: #2b2d31;
  overflow: hidden;
}}

.grid-column .tile {{
  height: 100%;
}}

.tile img,
.tile video {{
  width: 100%;
  height: 100%;
  object-fit: cover;
  display: block;
}}

.grid-single .tile img {{
  object-fit: contain;
  max-height: 350px;
}}

.tile-video .play-button {{
  position: absolute;
  top: 50%;
  left: 50%;
  width: 48px;
  height: 48px;
  margin: -24px 0 0 -24px;
  border-radius: 50%;
  background-color: rgba(0, 0, 0, 0.6);
}}

.tile-file {{
  display: flex;
  align-items: center;
  padding: 16px;
  border: 1px solid #1e1f22;
  border-radius: 8px;
}}

.tile-file .file-icon {{
  width: 30px;
  height: 40px;
  margin-right: 8px;
  border-radius: 3px;
  background-color: #5865f2;
  flex-shrink: 0;
}}

.tile-file .file-info {{
  display: flex;
  flex-direction: column;
  min-width: 0;
}}

.tile-file .file-name {{
  color: #00a8fc;
  text-decoration: none;
  white-space: nowrap;
  overflow: hidden;
  text-overflow: ellipsis;
}}

.tile-file .file-size {{
  font-size: 12px;
  color: #949ba4;
}}

.tile-overflow {{
  flex: 1;
  min-width: 0;
  position: relative;
  display: flex;
}}

.tile-overflow .more-badge {{
  position: absolute;
  inset: 0;
  display: flex;
  align-items: center;
  justify-content: center;
  background-color: rgba(0, 0, 0, 0.6);
  color: #ffffff;
  font-size: 28px;
  font-weight: 600;
}}

/* Stickers */
.stickers {{
  display: flex;
  gap: 8px;
  margin-top: 8px;
}}

.sticker {{
  width: 160px;
  height: 160px;
  object-fit: contain;
}}
"""
