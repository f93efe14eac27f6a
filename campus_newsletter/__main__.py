from campus_newsletter.cli import main

if __name__ == "__main__":
    main()
