"""
Example of the Sign in with Twitter flow.
"""

import asyncio
from dotenv import load_dotenv
from twitter_login import TwitterLoginError, TwitterOAuth
from twitter_login.config import get_settings

async def main():
    # Load environment variables
    load_dotenv()
    settings = get_settings()

    # Initialize the handshake from TWITTER_CONSUMER_KEY / TWITTER_CONSUMER_SECRET
    oauth = TwitterOAuth.from_settings(settings)

    try:
        # Step 1: get a request token and the URL to send the user to
        redirect = await oauth.begin_handshake(settings.TWITTER_CALLBACK_URL)
        print("\nAuthorize the application at:")
        print(redirect)

        # In a real app the provider redirects the user back to the callback.
        # For this example, paste the URL (or its query string) here.
        callback = input("\nEnter the URL Twitter redirected you to: ")

        # Steps 2 and 3: exchange the verifier and validate the credentials
        profile = await oauth.complete_from_callback(callback.strip())
        print(f"\nSigned in as @{profile.get('screen_name')} (id {profile.get('id_str')})")
        if profile.get('email'):
            print(f"Email: {profile['email']}")

    except TwitterLoginError as e:
        print(f"Error: {str(e)}")

if __name__ == "__main__":
    asyncio.run(main())
